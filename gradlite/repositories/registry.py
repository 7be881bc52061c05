"""Registry helpers binding repository DSL names to adapter factories."""

from __future__ import annotations

from collections.abc import Callable

from gradlite.manifest.descriptor import RepositoryDeclaration
from gradlite.repositories.base import RepositoryAdapter

RepositoryFactory = Callable[..., RepositoryAdapter]

_REPOSITORY_FACTORIES: dict[str, RepositoryFactory] = {}


def register_repository(kind: str, factory: RepositoryFactory) -> None:
    """Register a repository factory by DSL name.

    Example:
        >>> register_repository("mavenCentral", factory)
    """
    key = kind.strip().lower()
    if not key:
        raise ValueError("repository kind cannot be empty")
    _REPOSITORY_FACTORIES[key] = factory


def get_repository_factory(kind: str) -> RepositoryFactory:
    """Return a previously registered repository factory.

    Example:
        >>> fn = get_repository_factory("mavenCentral")
    """
    key = kind.strip().lower()
    if key not in _REPOSITORY_FACTORIES:
        available = ", ".join(sorted(_REPOSITORY_FACTORIES)) or "<none>"
        raise KeyError(f"Unknown repository '{kind}'. Registered: {available}")
    return _REPOSITORY_FACTORIES[key]


def list_repositories() -> tuple[str, ...]:
    """List registered repository kinds.

    Example:
        >>> kinds = list_repositories()
    """
    return tuple(sorted(_REPOSITORY_FACTORIES))


def build_repositories(
    declarations: tuple[RepositoryDeclaration, ...],
    **options: object,
) -> list[RepositoryAdapter]:
    """Instantiate adapters for declared repositories, preserving order.

    `options` (e.g. `session`, `timeout_s`) are passed to every factory.
    """
    return [get_repository_factory(decl.kind)(decl, **options) for decl in declarations]
