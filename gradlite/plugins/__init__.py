"""Known build plugins and default registry bindings."""

from gradlite.plugins.base import PluginSpec
from gradlite.plugins.registry import (
    configurations_for,
    get_plugin,
    is_known_plugin,
    list_plugins,
    register_plugin,
)

JAVA_CONFIGURATIONS = (
    "implementation",
    "compileOnly",
    "runtimeOnly",
    "annotationProcessor",
    "testImplementation",
    "testCompileOnly",
    "testRuntimeOnly",
    "testAnnotationProcessor",
)

register_plugin(PluginSpec("java", "Compiles and tests Java sources.", JAVA_CONFIGURATIONS))
register_plugin(
    PluginSpec("java-library", "Java plugin plus an exported API.", ("api", "compileOnlyApi"), implies=("java",))
)
register_plugin(PluginSpec("application", "Runnable JVM application.", (), implies=("java",)))
register_plugin(PluginSpec("java-test-fixtures", "Shared test fixtures.", ("testFixturesImplementation", "testFixturesApi"), implies=("java-library",)))
register_plugin(PluginSpec("groovy", "Compiles Groovy sources.", (), implies=("java",)))
register_plugin(PluginSpec("scala", "Compiles Scala sources.", (), implies=("java",)))
register_plugin(PluginSpec("java-platform", "Publishes a bill of materials.", ("api", "runtime")))
register_plugin(PluginSpec("org.jetbrains.kotlin.jvm", "Compiles Kotlin/JVM sources.", (), implies=("java",)))

__all__ = [
    "PluginSpec",
    "register_plugin",
    "get_plugin",
    "is_known_plugin",
    "list_plugins",
    "configurations_for",
    "JAVA_CONFIGURATIONS",
]
