"""Error taxonomy for manifest parsing, dependency resolution, and test setup."""

from __future__ import annotations


class ManifestError(ValueError):
    """Base class for all gradlite manifest failures."""


class MalformedManifest(ManifestError):
    """Manifest text is syntactically invalid or misses a required field.

    Example:
        >>> raise MalformedManifest("missing 'group' assignment")
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.message = message
        self.line = line
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}{message}")


class UnresolvedDependency(ManifestError):
    """One or more dependency coordinates could not be found anywhere."""

    def __init__(self, coordinates: tuple[str, ...], reasons: dict[str, str] | None = None) -> None:
        if not coordinates:
            raise ValueError("UnresolvedDependency needs at least one coordinate")
        self.coordinates = tuple(coordinates)
        self.coordinate = self.coordinates[0]
        self.reasons = dict(reasons or {})
        detail = self.reasons.get(self.coordinate)
        msg = f"Could not resolve {self.coordinate}"
        if detail:
            msg += f" ({detail})"
        if len(self.coordinates) > 1:
            msg += f" and {len(self.coordinates) - 1} more"
        super().__init__(msg)


class UnsupportedPlatform(ManifestError):
    """Configured test platform cannot run with the declared test dependencies."""

    def __init__(self, platform: str, reason: str) -> None:
        self.platform = platform
        self.reason = reason
        super().__init__(f"Test platform '{platform}' is not usable: {reason}")
