"""Maven-layout repositories on the local file system."""

from __future__ import annotations

from pathlib import Path

from gradlite.repositories.base import RepositoryAdapter, artifact_dir

DEFAULT_LOCAL_ROOT = Path("~/.m2/repository")


class LocalMavenRepository(RepositoryAdapter):
    """Repository backed by a directory such as `~/.m2/repository`."""

    def __init__(self, root: str | Path = DEFAULT_LOCAL_ROOT, name: str = "MavenLocal") -> None:
        self.name = name
        self.root = Path(root).expanduser()

    def has_module(self, group: str, name: str, version: str | None = None) -> bool:
        module_dir = self.root / artifact_dir(group, name)
        if version is None:
            return module_dir.is_dir() and any(p.is_dir() for p in module_dir.iterdir())
        return (module_dir / version / f"{name}-{version}.pom").is_file()
