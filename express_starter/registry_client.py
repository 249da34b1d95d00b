"""
registry_client.py

Responsibility: Isolate all npm registry interaction.

This module must be the only place that:
- Constructs registry package-metadata URLs
- Sends HTTP requests to the registry
- Interprets registry responses / error payloads

Lookups are independent: no caching and no retries. A batch of lookups runs
concurrently and either yields every version or raises.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


class RegistryError(RuntimeError):
    pass


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str


class RegistryClient:
    def __init__(self, registry_url: str = DEFAULT_REGISTRY_URL, *, timeout: float | None = None) -> None:
        if not registry_url.strip():
            raise RegistryError("Registry URL is required.")
        if timeout is not None and timeout <= 0:
            raise RegistryError(f"Timeout must be a positive number of seconds, got {timeout}.")
        self._registry_url = registry_url.rstrip("/")
        # None leaves requests without a timeout.
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": "express-starter",
        }

    def _request(self, path: str) -> Any:
        url = f"{self._registry_url}{path}"
        try:
            r = requests.request("GET", url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise RegistryError(f"Registry request failed GET {path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"error": r.text}
            message = payload.get("error", payload) if isinstance(payload, dict) else payload
            raise RegistryError(f"Registry error {r.status_code} GET {path}: {message}")
        try:
            return r.json()
        except ValueError as e:
            raise RegistryError(f"Registry returned a non-JSON body for GET {path}") from e

    def latest_version(self, name: str) -> Dependency:
        """
        Return the package name and its `latest` dist-tag.
        """
        logger.debug("Looking up latest version of %s", name)
        data = self._request("/" + quote(name, safe="@"))
        if not isinstance(data, dict):
            raise RegistryError(f"Unexpected registry payload for {name!r}")
        dist_tags = data.get("dist-tags") or {}
        version = dist_tags.get("latest") if isinstance(dist_tags, dict) else None
        if not version:
            raise RegistryError(f"Registry metadata for {name!r} has no latest version")
        resolved = Dependency(name=str(data.get("name") or name), version=str(version))
        logger.info("Resolved %s@%s", resolved.name, resolved.version)
        return resolved

    def resolve_all(self, names: Iterable[str]) -> list[Dependency]:
        """
        Look up every name concurrently and return the results in request order.

        If any lookup fails, the first failing name (in request order) raises
        and no partial result is returned.
        """
        names = list(names)
        if not names:
            return []
        with ThreadPoolExecutor(max_workers=len(names), thread_name_prefix="registry") as pool:
            futures = [pool.submit(self.latest_version, n) for n in names]
            return [f.result() for f in futures]
