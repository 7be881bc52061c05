"""Parse one manifest and print its descriptor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gradlite.errors import MalformedManifest
from gradlite.manifest import parse_manifest, render_manifest
from gradlite.report import DescriptorReport, ErrorReport


def main(argv: list[str] | None = None) -> int:
    """Entry-point for `gradlite-describe`."""
    ap = argparse.ArgumentParser(description="Parse a build.gradle.kts manifest and print the module descriptor.")
    ap.add_argument("manifest", type=str, nargs="?", default="build.gradle.kts")
    ap.add_argument("--format", choices=["json", "kts"], default="json")
    ap.add_argument("--log_level", type=str, default="WARNING")
    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.manifest)
    try:
        descriptor = parse_manifest(path.read_text(encoding="utf-8"))
    except (MalformedManifest, OSError) as exc:
        if args.format == "json":
            print(ErrorReport.from_exception(exc).model_dump_json(indent=2))
        print(f"[error] {path}: {exc}", file=sys.stderr)
        return 2

    if args.format == "kts":
        sys.stdout.write(render_manifest(descriptor))
    else:
        print(DescriptorReport.build(str(path), descriptor).model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
