"""Sibling-module graph of a multi-module build, read from `settings.gradle.kts`."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from gradlite.errors import MalformedManifest
from gradlite.manifest.lexer import split_args, split_call, split_statements, string_literal, strip_comments

_LOG = logging.getLogger(__name__)

SETTINGS_FILE = "settings.gradle.kts"
BUILD_FILE = "build.gradle.kts"
_ROOT_NAME_RE = re.compile(r"^rootProject\.name\s*=\s*(.+)$", re.DOTALL)


def normalize_path(path: str) -> str:
    """Return an absolute project path.

    Example:
        >>> normalize_path("spring-core")
        ':spring-core'
    """
    path = path.strip()
    return path if path.startswith(":") else f":{path}"


@dataclass(frozen=True)
class ProjectGraph:
    """Set of project paths that sibling references may point at."""

    root_name: str | None = None
    paths: frozenset[str] = frozenset()

    def contains(self, path: str) -> bool:
        return normalize_path(path) in self.paths

    def with_paths(self, *paths: str) -> ProjectGraph:
        return ProjectGraph(self.root_name, self.paths | {normalize_path(p) for p in paths})


def _with_parents(path: str) -> set[str]:
    """`include(":a:b")` also makes `:a` a project."""
    segments = [s for s in path.split(":") if s]
    return {":" + ":".join(segments[: i + 1]) for i in range(len(segments))}


def parse_settings(text: str) -> ProjectGraph:
    """Parse `settings.gradle.kts` text into a project graph.

    Example:
        >>> parse_settings('include("spring-core", "spring-context")').contains(":spring-core")
        True
    """
    root_name: str | None = None
    paths: set[str] = set()
    for stmt in split_statements(strip_comments(text)):
        m = _ROOT_NAME_RE.match(stmt.text)
        if m is not None:
            root_name = string_literal(m.group(1))
            if root_name is None:
                raise MalformedManifest("rootProject.name must be a string literal", stmt.line)
            continue
        call = split_call(stmt.text)
        if call is None or call[0] != "include" or call[2]:
            _LOG.debug("ignoring settings statement at line %d: %s", stmt.line, stmt.text)
            continue
        for arg in split_args(call[1]):
            value = string_literal(arg)
            if value is None or not value.strip(":"):
                raise MalformedManifest(f"include(...) expects project paths, got {arg!r}", stmt.line)
            paths |= _with_parents(normalize_path(value))
    return ProjectGraph(root_name=root_name, paths=frozenset(paths))


def find_settings(module_dir: Path) -> Path | None:
    """Walk upward from `module_dir` to the nearest settings file."""
    for candidate in (module_dir, *module_dir.parents):
        settings = candidate / SETTINGS_FILE
        if settings.is_file():
            return settings
    return None


def discover_project(module_dir: str | Path) -> ProjectGraph:
    """Build the project graph a module lives in.

    Uses the nearest `settings.gradle.kts`; without one, every sibling
    directory that holds a `build.gradle.kts` counts as a project.
    """
    module_dir = Path(module_dir).resolve()
    settings = find_settings(module_dir)
    if settings is not None:
        _LOG.debug("reading project graph from %s", settings)
        return parse_settings(settings.read_text(encoding="utf-8"))

    parent = module_dir.parent
    _LOG.debug("no %s found, scanning %s for sibling modules", SETTINGS_FILE, parent)
    siblings = {f":{p.name}" for p in parent.iterdir() if p.is_dir() and (p / BUILD_FILE).is_file()}
    return ProjectGraph(root_name=parent.name, paths=frozenset(siblings))
