"""Static metadata for build plugins known to gradlite."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PluginSpec:
    """What applying one plugin contributes to a module."""

    id: str
    description: str
    configurations: tuple[str, ...]
    implies: tuple[str, ...] = ()
