"""In-memory repository holding a fixed set of coordinates."""

from __future__ import annotations

from collections.abc import Iterable

from gradlite.repositories.base import RepositoryAdapter


class StaticRepository(RepositoryAdapter):
    """Repository answering from a fixed list of `group:name:version` strings.

    Example:
        >>> StaticRepository("fixed", ["org.junit:junit-bom:5.9.1"]).has_module("org.junit", "junit-bom")
        True
    """

    def __init__(self, name: str, coordinates: Iterable[str] = ()) -> None:
        self.name = name
        self._versions: dict[tuple[str, str], set[str]] = {}
        for notation in coordinates:
            self.add(notation)

    def add(self, notation: str) -> None:
        parts = notation.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"expected 'group:name:version', got {notation!r}")
        group, name, version = parts
        self._versions.setdefault((group, name), set()).add(version)

    def has_module(self, group: str, name: str, version: str | None = None) -> bool:
        versions = self._versions.get((group, name))
        if not versions:
            return False
        return version is None or version in versions
