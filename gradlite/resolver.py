"""One-shot dependency resolution against repositories and the project graph."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from gradlite.errors import UnresolvedDependency
from gradlite.manifest.descriptor import (
    KOTLIN_GROUP,
    Dependency,
    ModuleCoordinate,
    ModuleDescriptor,
    ProjectCoordinate,
    Scope,
)
from gradlite.project.graph import ProjectGraph
from gradlite.repositories.base import RepositoryAdapter

_LOG = logging.getLogger(__name__)

PROJECT_SOURCE = "project"


@dataclass(frozen=True)
class ResolvedDependency:
    """A dependency and where it was found."""

    dependency: Dependency
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "configuration": self.dependency.configuration,
            "scope": self.dependency.scope.value,
            "coordinate": str(self.dependency.coordinate),
            "source": self.source,
        }


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving every declared dependency of one module."""

    resolved: tuple[ResolvedDependency, ...]

    @property
    def coordinates(self) -> frozenset[str]:
        """Return the resolved dependency set as `configuration(coordinate)` strings."""
        return frozenset(str(r.dependency) for r in self.resolved)


def _visible_platforms(dep: Dependency, descriptor: ModuleDescriptor) -> list[ModuleCoordinate]:
    """Platforms that constrain `dep`: same scope, plus main-scope ones for test dependencies."""
    platforms: list[ModuleCoordinate] = []
    for other in descriptor.dependencies:
        coord = other.coordinate
        if not isinstance(coord, ModuleCoordinate) or not coord.is_platform:
            continue
        if other.scope is dep.scope or other.scope is Scope.IMPLEMENTATION:
            platforms.append(coord)
    return platforms


def _aligned_by_plugin(coord: ModuleCoordinate, descriptor: ModuleDescriptor) -> bool:
    """Kotlin plugins pin the version of the `org.jetbrains.kotlin` modules."""
    return coord.group == KOTLIN_GROUP and any(p.startswith(f"{KOTLIN_GROUP}.") for p in descriptor.plugin_ids)


def _resolve_module(
    dep: Dependency,
    coord: ModuleCoordinate,
    descriptor: ModuleDescriptor,
    repositories: Sequence[RepositoryAdapter],
) -> tuple[str | None, str]:
    if coord.version is None and not coord.is_platform:
        if not _visible_platforms(dep, descriptor) and not _aligned_by_plugin(coord, descriptor):
            return None, "no version given and no platform constrains it"
    if not repositories:
        return None, "no repositories declared"
    for repo in repositories:
        if repo.has_module(coord.group, coord.name, coord.version):
            return repo.name, ""
    searched = ", ".join(r.name for r in repositories)
    return None, f"not found in {searched}"


def resolve_dependencies(
    descriptor: ModuleDescriptor,
    repositories: Sequence[RepositoryAdapter],
    graph: ProjectGraph,
) -> Resolution:
    """Resolve each declared dependency once, in declaration order.

    Module coordinates are looked up in `repositories` (first hit wins);
    project coordinates in `graph`. Every failure is collected before raising.

    Raises:
        UnresolvedDependency: naming the first unresolvable coordinate.

    Example:
        >>> resolution = resolve_dependencies(descriptor, [StaticRepository("fixed", coords)], graph)
    """
    resolved: list[ResolvedDependency] = []
    failures: dict[str, str] = {}
    for dep in descriptor.dependencies:
        coord = dep.coordinate
        if isinstance(coord, ProjectCoordinate):
            if graph.contains(coord.path):
                resolved.append(ResolvedDependency(dep, PROJECT_SOURCE))
            else:
                failures.setdefault(str(coord), f"project {coord.path} is not part of the build")
            continue

        source, reason = _resolve_module(dep, coord, descriptor, repositories)
        if source is None:
            failures.setdefault(str(coord), reason)
        else:
            _LOG.debug("resolved %s from %s", coord, source)
            resolved.append(ResolvedDependency(dep, source))

    if failures:
        raise UnresolvedDependency(tuple(failures), failures)
    return Resolution(resolved=tuple(resolved))
