"""Command-line entrypoints for gradlite package scripts."""

from __future__ import annotations


def run_describe() -> None:
    """Parse a manifest and print its descriptor.

    Example:
        >>> # CLI: gradlite-describe mytest/build.gradle.kts --format json
    """
    from gradlite.tools.describe import main

    raise SystemExit(main())


def run_check() -> None:
    """Parse, validate, resolve, and plan the test run for one manifest.

    Example:
        >>> # CLI: gradlite-check mytest/build.gradle.kts --settings settings.gradle.kts
    """
    from gradlite.tools.check import main

    raise SystemExit(main())
