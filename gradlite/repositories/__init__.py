"""Repository adapters and default registry bindings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gradlite.manifest.descriptor import RepositoryDeclaration
from gradlite.repositories.base import RepositoryAdapter
from gradlite.repositories.local import LocalMavenRepository
from gradlite.repositories.maven_http import DEFAULT_TIMEOUT_S, MavenHttpRepository
from gradlite.repositories.registry import (
    build_repositories,
    get_repository_factory,
    list_repositories,
    register_repository,
)
from gradlite.repositories.static import StaticRepository

MAVEN_CENTRAL_URL = "https://repo.maven.apache.org/maven2"
GOOGLE_URL = "https://dl.google.com/dl/android/maven2"
GRADLE_PLUGIN_PORTAL_URL = "https://plugins.gradle.org/m2"


def _remote(name: str, url: str) -> Any:
    def factory(
        decl: RepositoryDeclaration,
        session: Any | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        **_: Any,
    ) -> RepositoryAdapter:
        return MavenHttpRepository(name, url, session=session, timeout_s=timeout_s)

    return factory


def _maven_local(decl: RepositoryDeclaration, local_root: str | Path | None = None, **_: Any) -> RepositoryAdapter:
    if local_root is None:
        return LocalMavenRepository()
    return LocalMavenRepository(local_root)


def _custom_maven(
    decl: RepositoryDeclaration,
    session: Any | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    **_: Any,
) -> RepositoryAdapter:
    url = decl.url or ""
    if url.startswith(("http://", "https://")):
        return MavenHttpRepository(url, url, session=session, timeout_s=timeout_s)
    path = url[len("file://") :] if url.startswith("file://") else url
    return LocalMavenRepository(path, name=url)


register_repository("mavenCentral", _remote("MavenRepo", MAVEN_CENTRAL_URL))
register_repository("google", _remote("Google", GOOGLE_URL))
register_repository("gradlePluginPortal", _remote("Gradle Central Plugin Repository", GRADLE_PLUGIN_PORTAL_URL))
register_repository("mavenLocal", _maven_local)
register_repository("maven", _custom_maven)

__all__ = [
    "RepositoryAdapter",
    "LocalMavenRepository",
    "MavenHttpRepository",
    "StaticRepository",
    "register_repository",
    "get_repository_factory",
    "list_repositories",
    "build_repositories",
    "MAVEN_CENTRAL_URL",
]
