"""Full manifest check: parse, validate, resolve dependencies, plan the test run."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from gradlite.errors import MalformedManifest, UnresolvedDependency, UnsupportedPlatform
from gradlite.manifest import parse_manifest, validate_descriptor
from gradlite.project import ProjectGraph, discover_project, parse_settings
from gradlite.report import CheckReport
from gradlite.repositories import DEFAULT_TIMEOUT_S, MavenHttpRepository, RepositoryAdapter, build_repositories
from gradlite.resolver import resolve_dependencies
from gradlite.testing import configure_test_run

_LOG = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MALFORMED = 2


@dataclass(frozen=True)
class CheckConfig:
    """Runtime configuration for one manifest check."""

    manifest: str
    settings: str
    offline: bool
    timeout_s: float
    local_repo: str
    json_output: bool
    log_level: str


def _load_graph(cfg: CheckConfig) -> ProjectGraph:
    if cfg.settings.strip():
        return parse_settings(Path(cfg.settings).read_text(encoding="utf-8"))
    return discover_project(Path(cfg.manifest).resolve().parent)


def _build_repositories(cfg: CheckConfig, descriptor_repos: tuple) -> list[RepositoryAdapter]:
    options: dict[str, object] = {"timeout_s": cfg.timeout_s}
    if cfg.local_repo.strip():
        options["local_root"] = cfg.local_repo.strip()
    repos = build_repositories(descriptor_repos, **options)
    if cfg.offline:
        repos = [r for r in repos if not isinstance(r, MavenHttpRepository)]
    return repos


def run_check(cfg: CheckConfig) -> tuple[int, CheckReport]:
    """Run every check stage and collect results into a report.

    Unreadable manifest or settings files fail before parsing. Malformed
    manifests stop at parsing; an unsupported test platform only fails the
    test stage, so resolution results are still reported.
    """
    report = CheckReport(path=cfg.manifest)
    try:
        descriptor = parse_manifest(Path(cfg.manifest).read_text(encoding="utf-8"))
        validate_descriptor(descriptor)
        graph = _load_graph(cfg)
    except MalformedManifest as exc:
        report.record_error(exc)
        return EXIT_MALFORMED, report
    except OSError as exc:
        _LOG.debug("cannot read input for %s", cfg.manifest, exc_info=True)
        report.record_error(exc)
        return EXIT_FAILED, report
    report.record_descriptor(descriptor)

    exit_code = EXIT_OK
    try:
        resolution = resolve_dependencies(descriptor, _build_repositories(cfg, descriptor.repositories), graph)
    except UnresolvedDependency as exc:
        report.record_error(exc)
        exit_code = EXIT_FAILED
    else:
        report.record_resolution(resolution)

    try:
        report.record_test_plan(configure_test_run(descriptor))
    except UnsupportedPlatform as exc:
        report.record_error(exc)
        exit_code = EXIT_FAILED

    report.ok = exit_code == EXIT_OK
    return exit_code, report


def _print_text(report: CheckReport) -> None:
    print(f"[gradlite-check] {report.path} group={report.group} version={report.version}")
    for item in report.resolved:
        print(f"[ok] {item['configuration']}({item['coordinate']}) <- {item['source']}")
    if report.test_plan is not None:
        engines = ", ".join(report.test_plan["engines"])
        print(f"[ok] test platform={report.test_plan['platform']} engines={engines}")
    for err in report.errors:
        print(f"[error] {err.kind}: {err.message}", file=sys.stderr)
        for coord in err.coordinates[1:]:
            print(f"[error]   also unresolved: {coord}", file=sys.stderr)


def _parse_args(argv: list[str] | None = None) -> CheckConfig:
    """Parse CLI args into a structured check configuration."""
    ap = argparse.ArgumentParser(description="Check a module manifest: parse, resolve dependencies, plan tests.")
    ap.add_argument("manifest", type=str, nargs="?", default="build.gradle.kts")
    ap.add_argument("--settings", type=str, default="", help="settings.gradle.kts to read the project graph from")
    ap.add_argument("--offline", action="store_true", help="skip remote repositories")
    ap.add_argument("--timeout_s", type=float, default=DEFAULT_TIMEOUT_S)
    ap.add_argument("--local_repo", type=str, default="", help="override ~/.m2/repository for mavenLocal()")
    ap.add_argument("--json", action="store_true")
    ap.add_argument("--log_level", type=str, default="WARNING")
    args = ap.parse_args(argv)

    return CheckConfig(
        manifest=args.manifest,
        settings=args.settings,
        offline=bool(args.offline),
        timeout_s=args.timeout_s,
        local_repo=args.local_repo,
        json_output=bool(args.json),
        log_level=args.log_level,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry-point for `gradlite-check`."""
    cfg = _parse_args(argv)
    logging.basicConfig(level=cfg.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    exit_code, report = run_check(cfg)
    if cfg.json_output:
        print(report.model_dump_json(indent=2))
    else:
        _print_text(report)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
