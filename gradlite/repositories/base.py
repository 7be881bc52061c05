"""Repository adapter interface for coordinate lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod


def artifact_dir(group: str, name: str) -> str:
    """Return the Maven-layout directory for a module.

    Example:
        >>> artifact_dir("org.junit", "junit-bom")
        'org/junit/junit-bom'
    """
    return f"{group.replace('.', '/')}/{name}"


class RepositoryAdapter(ABC):
    """Minimal package source contract: does this repository hold a module?"""

    name: str = "repository"

    @abstractmethod
    def has_module(self, group: str, name: str, version: str | None = None) -> bool:
        """Return True when the module exists, at `version` or at any version if None.

        Example:
            >>> repo.has_module("org.junit", "junit-bom", "5.9.1")
            True
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
