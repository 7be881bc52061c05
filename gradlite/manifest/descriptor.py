"""Immutable value types describing one module's build manifest."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Union

SNAPSHOT_SUFFIX = "-SNAPSHOT"
KOTLIN_GROUP = "org.jetbrains.kotlin"


class Scope(str, Enum):
    """Build phase in which a dependency is visible."""

    IMPLEMENTATION = "implementation"
    TEST = "test"


@dataclass(frozen=True)
class PluginDeclaration:
    """One entry of the `plugins { }` block."""

    id: str
    version: str | None = None
    apply: bool = True


@dataclass(frozen=True)
class RepositoryDeclaration:
    """One entry of the `repositories { }` block.

    `kind` is the DSL call name (`mavenCentral`, `maven`, ...); `url` is only
    set for custom `maven` repositories.
    """

    kind: str
    url: str | None = None

    @property
    def label(self) -> str:
        """Return a short human-readable label.

        Example:
            >>> RepositoryDeclaration("maven", "https://repo.example.com").label
            'maven(https://repo.example.com)'
        """
        return f"{self.kind}({self.url})" if self.url else self.kind


@dataclass(frozen=True)
class ModuleCoordinate:
    """External package reference `group:name[:version]`."""

    group: str
    name: str
    version: str | None = None
    platform: str | None = None

    @property
    def notation(self) -> str:
        """Return the colon-separated coordinate string.

        Example:
            >>> ModuleCoordinate("org.junit", "junit-bom", "5.9.1").notation
            'org.junit:junit-bom:5.9.1'
        """
        parts = [self.group, self.name]
        if self.version:
            parts.append(self.version)
        return ":".join(parts)

    @property
    def is_platform(self) -> bool:
        return self.platform is not None

    def __str__(self) -> str:
        if self.platform:
            return f'{self.platform}("{self.notation}")'
        return self.notation


@dataclass(frozen=True)
class ProjectCoordinate:
    """Reference to a sibling module by its project path."""

    path: str

    def __str__(self) -> str:
        return f'project("{self.path}")'


Coordinate = Union[ModuleCoordinate, ProjectCoordinate]


@dataclass(frozen=True)
class ExcludeRule:
    """Transitive exclusion attached to a dependency closure."""

    group: str | None = None
    module: str | None = None


@dataclass(frozen=True)
class Dependency:
    """One `(configuration, coordinate)` entry of the `dependencies { }` block."""

    configuration: str
    coordinate: Coordinate
    excludes: tuple[ExcludeRule, ...] = ()

    @property
    def scope(self) -> Scope:
        """Derive visibility from the configuration name.

        Example:
            >>> Dependency("testImplementation", ProjectCoordinate(":a")).scope
            <Scope.TEST: 'test'>
        """
        return Scope.TEST if self.configuration.startswith("test") else Scope.IMPLEMENTATION

    def __str__(self) -> str:
        return f"{self.configuration}({self.coordinate})"


@dataclass(frozen=True)
class TestConfiguration:
    """Options of the test task; `platform` selects the test engine."""

    __test__ = False

    platform: str | None = None
    include_tags: tuple[str, ...] = ()
    exclude_tags: tuple[str, ...] = ()
    include_engines: tuple[str, ...] = ()
    exclude_engines: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleDescriptor:
    """Static facts about one module, as read from its manifest."""

    group: str
    version: str
    plugins: tuple[PluginDeclaration, ...] = ()
    repositories: tuple[RepositoryDeclaration, ...] = ()
    dependencies: tuple[Dependency, ...] = ()
    test_configuration: TestConfiguration = field(default_factory=TestConfiguration)
    description: str | None = None
    extensions: tuple[str, ...] = ()

    @property
    def is_snapshot(self) -> bool:
        return self.version.endswith(SNAPSHOT_SUFFIX)

    @property
    def plugin_ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.plugins if p.apply)

    def dependencies_in(self, scope: Scope) -> tuple[Dependency, ...]:
        """Return dependencies visible in the given scope only.

        Example:
            >>> len(descriptor.dependencies_in(Scope.TEST))
            2
        """
        return tuple(d for d in self.dependencies if d.scope is scope)

    def to_dict(self) -> dict[str, Any]:
        """Convert descriptor to a JSON-safe dict."""
        out = asdict(self)
        out["is_snapshot"] = self.is_snapshot
        for raw, dep in zip(out["dependencies"], self.dependencies):
            raw["scope"] = dep.scope.value
            raw["coordinate"]["kind"] = "project" if isinstance(dep.coordinate, ProjectCoordinate) else "module"
        return out
