import json
from pathlib import Path

from pytest import CaptureFixture

from gradlite.tools.describe import main

EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "multimodule" / "mytest" / "build.gradle.kts"


def test_describe_json(capsys: CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE)]) == 0
    payload = json.loads(capsys.readouterr().out)
    descriptor = payload["descriptor"]
    assert descriptor["group"] == "org.example"
    assert descriptor["version"] == "1.0.0-SNAPSHOT"
    assert len(descriptor["dependencies"]) == 5


def test_describe_kts_is_canonical(capsys: CaptureFixture[str]) -> None:
    assert main([str(EXAMPLE), "--format", "kts"]) == 0
    out = capsys.readouterr().out
    assert "\timplementation" not in out
    assert '    implementation(project(":spring-core"))' in out


def test_describe_malformed(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    manifest = tmp_path / "build.gradle.kts"
    manifest.write_text('version = "1"\n', encoding="utf-8")
    assert main([str(manifest)]) == 2
    captured = capsys.readouterr()
    assert json.loads(captured.out)["kind"] == "MalformedManifest"
    assert "missing 'group'" in captured.err


def test_describe_missing_manifest(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    missing = tmp_path / "build.gradle.kts"
    assert main([str(missing), "--format", "kts"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith(f"[error] {missing}:")
