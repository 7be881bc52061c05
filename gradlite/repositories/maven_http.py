"""Remote Maven repository checked over HTTP.

Lookups are fail-soft: network errors are logged and reported as "not found in
this repository" so resolution can move on to the next declared repository.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from gradlite.repositories.base import RepositoryAdapter, artifact_dir

_LOG = logging.getLogger(__name__)
DEFAULT_TIMEOUT_S = 5.0


class MavenHttpRepository(RepositoryAdapter):
    """Maven-layout repository reachable at an http(s) base URL."""

    def __init__(
        self,
        name: str,
        url: str,
        session: Any | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.name = name
        self.url = url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout_s = float(timeout_s)

    def _module_url(self, group: str, name: str, version: str | None) -> str:
        base = f"{self.url}/{artifact_dir(group, name)}"
        if version is None:
            return f"{base}/maven-metadata.xml"
        return f"{base}/{version}/{name}-{version}.pom"

    def has_module(self, group: str, name: str, version: str | None = None) -> bool:
        url = self._module_url(group, name, version)
        try:
            response = self.session.head(url, timeout=self.timeout_s, allow_redirects=True)
        except requests.RequestException as exc:
            _LOG.debug("lookup of %s in %s failed: %s", url, self.name, exc)
            return False
        _LOG.debug("HEAD %s -> %s", url, response.status_code)
        return bool(response.ok)
