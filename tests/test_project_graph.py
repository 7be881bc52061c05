from pathlib import Path

from pytest import raises

from gradlite.errors import MalformedManifest
from gradlite.project import ProjectGraph, discover_project, normalize_path, parse_settings

EXAMPLE_ROOT = Path(__file__).resolve().parents[1] / "examples" / "multimodule"


def test_parse_settings_includes_and_root_name() -> None:
    graph = parse_settings((EXAMPLE_ROOT / "settings.gradle.kts").read_text(encoding="utf-8"))
    assert graph.root_name == "spring-playground"
    assert graph.paths == frozenset({":spring-core", ":spring-context", ":spring-instrument", ":mytest"})
    assert graph.contains("spring-core")
    assert not graph.contains(":spring-beans")


def test_nested_include_adds_parents() -> None:
    graph = parse_settings('include(":libs:core") // nested')
    assert graph.paths == frozenset({":libs", ":libs:core"})


def test_include_requires_string_paths() -> None:
    with raises(MalformedManifest):
        parse_settings("include(modules)")


def test_discover_project_uses_nearest_settings() -> None:
    graph = discover_project(EXAMPLE_ROOT / "mytest")
    assert graph.contains(":spring-instrument")


def test_discover_project_without_settings_scans_siblings(tmp_path: Path) -> None:
    for name in ("app", "lib"):
        (tmp_path / name).mkdir()
        (tmp_path / name / "build.gradle.kts").write_text('group = "g"\nversion = "1"\n', encoding="utf-8")
    (tmp_path / "docs").mkdir()
    graph = discover_project(tmp_path / "app")
    assert graph.paths == frozenset({":app", ":lib"})


def test_graph_helpers() -> None:
    assert normalize_path(" core ") == ":core"
    graph = ProjectGraph().with_paths("a", ":b")
    assert graph.contains(":a") and graph.contains("b")
