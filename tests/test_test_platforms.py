from pathlib import Path

from pytest import raises

from gradlite.errors import UnsupportedPlatform
from gradlite.manifest import parse_manifest, render_manifest
from gradlite.testing import (
    DEFAULT_PLATFORM,
    TestPlatformSpec,
    configure_test_run,
    get_platform,
    list_platforms,
    platform_for_call,
    register_platform,
    unregister_platform,
)

EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "multimodule" / "mytest" / "build.gradle.kts"


def _manifest(deps: str, test_task: str = "") -> str:
    return f'group = "g"\nversion = "1"\ndependencies {{\n{deps}\n}}\n{test_task}'


def test_default_platforms_registered() -> None:
    assert list_platforms() == ("junit", "junit-platform", "testng")
    assert get_platform("JUnit-Platform").dsl_call == "useJUnitPlatform"


def test_example_uses_junit_platform_with_jupiter_engine() -> None:
    plan = configure_test_run(parse_manifest(EXAMPLE.read_text(encoding="utf-8")))
    assert plan.platform == "junit-platform"
    assert plan.engines == ("org.junit.jupiter:junit-jupiter",)
    assert plan.to_dict()["options"]["platform"] == "junit-platform"


def test_platform_without_matching_engine_is_unsupported() -> None:
    text = _manifest('testImplementation("junit:junit:4.13.2")', "tasks.test {\n    useJUnitPlatform()\n}\n")
    with raises(UnsupportedPlatform) as info:
        configure_test_run(parse_manifest(text))
    assert info.value.platform == "junit-platform"
    assert "org.junit.jupiter" in info.value.reason


def test_bom_alone_does_not_provide_an_engine() -> None:
    text = _manifest(
        'testImplementation(platform("org.junit:junit-bom:5.9.1"))',
        "tasks.test {\n    useJUnitPlatform()\n}\n",
    )
    with raises(UnsupportedPlatform):
        configure_test_run(parse_manifest(text))


def test_default_platform_is_junit4() -> None:
    plan = configure_test_run(parse_manifest(_manifest('testImplementation("junit:junit:4.13.2")')))
    assert plan.platform == DEFAULT_PLATFORM == "junit"


def test_testng_engine_from_implementation_classpath() -> None:
    text = _manifest('implementation("org.testng:testng:7.8.0")', "tasks.test {\n    useTestNG()\n}\n")
    assert configure_test_run(parse_manifest(text)).engines == ("org.testng:testng:7.8.0",)


def test_compile_only_is_not_on_test_runtime() -> None:
    text = _manifest('compileOnly("org.testng:testng:7.8.0")', "tasks.test {\n    useTestNG()\n}\n")
    with raises(UnsupportedPlatform):
        configure_test_run(parse_manifest(text))


def test_module_without_tests_gets_empty_default_plan() -> None:
    plan = configure_test_run(parse_manifest('group = "g"\nversion = "1"\n'))
    assert plan.platform == DEFAULT_PLATFORM
    assert plan.engines == ()


def test_explicit_platform_without_test_dependencies_is_unsupported() -> None:
    text = 'group = "g"\nversion = "1"\ntasks.test {\n    useJUnit()\n}\n'
    with raises(UnsupportedPlatform) as info:
        configure_test_run(parse_manifest(text))
    assert info.value.platform == "junit"


def test_platform_for_call_uses_registered_calls() -> None:
    assert platform_for_call("useTestNG").name == "testng"
    assert platform_for_call("useJUnitPlatform").name == "junit-platform"
    assert platform_for_call("useSomethingElse") is None


def test_registered_platform_is_parsed_and_rendered() -> None:
    register_platform(TestPlatformSpec("spock", "useSpock", ("org.spockframework",)))
    try:
        text = _manifest(
            'testImplementation("org.spockframework:spock-core:2.3-groovy-4.0")',
            "tasks.test {\n    useSpock()\n}\n",
        )
        descriptor = parse_manifest(text)
        assert descriptor.test_configuration.platform == "spock"
        assert "    useSpock()\n" in render_manifest(descriptor)
        assert configure_test_run(descriptor).engines == ("org.spockframework:spock-core:2.3-groovy-4.0",)
    finally:
        unregister_platform("spock")
    assert platform_for_call("useSpock") is None


def test_dsl_call_cannot_select_two_platforms() -> None:
    with raises(ValueError):
        register_platform(TestPlatformSpec("jupiter", "useJUnitPlatform", ("org.junit.jupiter",)))
    assert get_platform("junit-platform").dsl_call == "useJUnitPlatform"
