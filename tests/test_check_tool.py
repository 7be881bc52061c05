import json
from pathlib import Path

from pytest import CaptureFixture

from gradlite.tools.check import EXIT_FAILED, EXIT_MALFORMED, EXIT_OK, CheckConfig, main, run_check

EXAMPLE_ROOT = Path(__file__).resolve().parents[1] / "examples" / "multimodule"


def _cfg(manifest: Path, **overrides: object) -> CheckConfig:
    base = {
        "manifest": str(manifest),
        "settings": "",
        "offline": True,
        "timeout_s": 1.0,
        "local_repo": "",
        "json_output": False,
        "log_level": "WARNING",
    }
    base.update(overrides)
    return CheckConfig(**base)


def _write_local_repo(root: Path, *coords: str) -> None:
    for notation in coords:
        group, name, version = notation.split(":")
        module_dir = root.joinpath(*group.split("."), name, version)
        module_dir.mkdir(parents=True)
        (module_dir / f"{name}-{version}.pom").write_text("<project/>", encoding="utf-8")


def _project(tmp_path: Path) -> Path:
    (tmp_path / "settings.gradle.kts").write_text(
        (EXAMPLE_ROOT / "settings.gradle.kts").read_text(encoding="utf-8"), encoding="utf-8"
    )
    module = tmp_path / "mytest"
    module.mkdir()
    text = (EXAMPLE_ROOT / "mytest" / "build.gradle.kts").read_text(encoding="utf-8")
    manifest = module / "build.gradle.kts"
    manifest.write_text(text.replace("mavenCentral()", "mavenLocal()"), encoding="utf-8")
    return manifest


def test_check_passes_with_local_repository(tmp_path: Path) -> None:
    manifest = _project(tmp_path)
    local = tmp_path / "m2"
    _write_local_repo(local, "org.junit:junit-bom:5.9.1", "org.junit.jupiter:junit-jupiter:5.9.1")

    code, report = run_check(_cfg(manifest, local_repo=str(local)))
    assert code == EXIT_OK
    assert report.ok
    assert report.snapshot
    assert len(report.resolved) == 5
    assert report.test_plan is not None
    assert report.test_plan["platform"] == "junit-platform"


def test_offline_example_cannot_reach_central() -> None:
    code, report = run_check(_cfg(EXAMPLE_ROOT / "mytest" / "build.gradle.kts"))
    assert code == EXIT_FAILED
    assert not report.ok
    assert [e.kind for e in report.errors] == ["UnresolvedDependency"]
    assert len(report.errors[0].coordinates) == 2
    # The test stage still runs after a resolution failure.
    assert report.test_plan is not None


def test_malformed_manifest_stops_early(tmp_path: Path) -> None:
    manifest = tmp_path / "build.gradle.kts"
    manifest.write_text('group = "g"\n', encoding="utf-8")
    code, report = run_check(_cfg(manifest))
    assert code == EXIT_MALFORMED
    assert report.errors[0].kind == "MalformedManifest"
    assert report.group is None


def test_main_prints_json(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    manifest = _project(tmp_path)
    code = main([str(manifest), "--json", "--local_repo", str(tmp_path / "empty")])
    payload = json.loads(capsys.readouterr().out)
    assert code == EXIT_FAILED
    assert payload["group"] == "org.example"
    assert payload["errors"][0]["kind"] == "UnresolvedDependency"


def test_main_text_output_with_explicit_settings(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    manifest = tmp_path / "build.gradle.kts"
    manifest.write_text(
        'plugins { java }\ngroup = "g"\nversion = "1"\ndependencies {\n    implementation(project(":core"))\n}\n',
        encoding="utf-8",
    )
    settings = tmp_path / "other-settings.gradle.kts"
    settings.write_text('include("core")\n', encoding="utf-8")
    code = main([str(manifest), "--settings", str(settings), "--offline"])
    captured = capsys.readouterr()
    assert code == EXIT_FAILED
    assert '[ok] implementation(project(":core")) <- project' in captured.out
    assert "UnsupportedPlatform" in captured.err


def test_module_without_tests_passes() -> None:
    code, report = run_check(_cfg(EXAMPLE_ROOT / "spring-core" / "build.gradle.kts"))
    assert code == EXIT_OK
    assert report.ok
    assert not report.resolved
    assert report.test_plan is not None
    assert report.test_plan["platform"] == "junit"
    assert not report.test_plan["engines"]


def test_missing_manifest_is_reported(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    missing = tmp_path / "nope" / "build.gradle.kts"
    code, report = run_check(_cfg(missing))
    assert code == EXIT_FAILED
    assert not report.ok
    assert report.errors[0].kind == "FileNotFoundError"

    assert main([str(missing), "--offline"]) == EXIT_FAILED
    assert "[error] FileNotFoundError" in capsys.readouterr().err


def test_missing_settings_is_reported(tmp_path: Path) -> None:
    manifest = _project(tmp_path)
    code, report = run_check(_cfg(manifest, settings=str(tmp_path / "missing.gradle.kts")))
    assert code == EXIT_FAILED
    assert report.errors[0].kind == "FileNotFoundError"
