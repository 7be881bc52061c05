"""Test platforms, default registry bindings, and test-run planning."""

from gradlite.testing.base import TestPlatformSpec
from gradlite.testing.plan import DEFAULT_PLATFORM, TestRunPlan, configure_test_run
from gradlite.testing.registry import (
    get_platform,
    list_platforms,
    platform_for_call,
    register_platform,
    unregister_platform,
)

register_platform(
    TestPlatformSpec(
        name="junit-platform",
        dsl_call="useJUnitPlatform",
        engine_groups=(
            "org.junit.jupiter",
            "org.junit.vintage",
            "org.junit.platform",
            "net.jqwik",
            "io.kotest",
            "io.cucumber",
            "io.spekframework.spek2",
        ),
        description="JUnit Platform launcher with pluggable engines.",
    )
)
register_platform(TestPlatformSpec("junit", "useJUnit", ("junit",), "JUnit 4 runner."))
register_platform(TestPlatformSpec("testng", "useTestNG", ("org.testng",), "TestNG runner."))

__all__ = [
    "TestPlatformSpec",
    "TestRunPlan",
    "DEFAULT_PLATFORM",
    "configure_test_run",
    "get_platform",
    "list_platforms",
    "register_platform",
    "unregister_platform",
    "platform_for_call",
]
