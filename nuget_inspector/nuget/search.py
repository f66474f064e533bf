"""Thin NuGet v3 registry client used by resolvers to look up package edges."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import lowest_version

log = structlog.get_logger("nuget_inspector.nuget")

DEFAULT_PACKAGES_REPO_URL = "https://api.nuget.org/v3/index.json"

_REGISTRATION_TYPES = (
    "RegistrationsBaseUrl/3.6.0",
    "RegistrationsBaseUrl/3.4.0",
    "RegistrationsBaseUrl",
)


class NugetSearchService:
    """Resolve a package's direct dependencies from a NuGet v3 feed.

    Lookups are cached per package id and version. Network and protocol
    errors are logged and reported as "unknown" (None), never raised.
    """

    def __init__(
        self,
        packages_repo_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._index_url = packages_repo_url or DEFAULT_PACKAGES_REPO_URL
        self._client = client or httpx.Client(timeout=30.0, follow_redirects=True)
        self._registration_base: str | None = None
        self._cache: dict[PackageId, frozenset[PackageId] | None] = {}

    # ── lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> NugetSearchService:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── public ─────────────────────────────────────────────────────────────

    def find_dependencies(self, package_id: PackageId) -> frozenset[PackageId] | None:
        """Direct dependencies of *package_id* across all target frameworks."""
        if package_id.version is None:
            return None
        key = PackageId(package_id.name.lower(), package_id.version.lower())
        if key not in self._cache:
            self._cache[key] = self._lookup(key)
        return self._cache[key]

    # ── internal ───────────────────────────────────────────────────────────

    def _lookup(self, key: PackageId) -> frozenset[PackageId] | None:
        try:
            base = self._registration_url()
            leaf = self._get_json(f"{base}{key.name}/{key.version}.json")
            entry = leaf.get("catalogEntry")
            if isinstance(entry, str):
                entry = self._get_json(entry)
            if not isinstance(entry, dict):
                return None
            return _dependencies_of(entry)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            log.warning(
                "nuget.lookup_failed",
                package=key.name,
                version=key.version,
                error=str(exc),
            )
            return None

    def _registration_url(self) -> str:
        if self._registration_base is None:
            index = self._get_json(self._index_url)
            resources = {
                r.get("@type"): r.get("@id")
                for r in index.get("resources") or []
                if isinstance(r, dict)
            }
            for resource_type in _REGISTRATION_TYPES:
                url = resources.get(resource_type)
                if url:
                    self._registration_base = url if url.endswith("/") else url + "/"
                    break
            else:
                raise KeyError(f"no registration resource in {self._index_url}")
        return self._registration_base

    def _get_json(self, url: str) -> dict[str, Any]:
        response = self._client.get(url)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"unexpected payload from {url}")
        return data


def _dependencies_of(catalog_entry: dict[str, Any]) -> frozenset[PackageId]:
    found: set[PackageId] = set()
    for group in catalog_entry.get("dependencyGroups") or []:
        if not isinstance(group, dict):
            continue
        for dep in group.get("dependencies") or []:
            if not isinstance(dep, dict):
                continue
            name = dep.get("id")
            if name:
                found.add(PackageId(name, lowest_version(dep.get("range"))))
    return frozenset(found)
