"""Resolver contract shared by every manifest format."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from nuget_inspector.models import PackageId, PackageSet

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService


@dataclass(frozen=True)
class ResolverResult:
    """Outcome of one resolver run.

    ``ok`` is False when the resolver could not handle the manifest and the
    caller should try its fallback; ``reason`` then says why.
    """

    ok: bool
    packages: frozenset[PackageSet] = frozenset()
    dependencies: frozenset[PackageId] = frozenset()
    project_version: str | None = None
    reason: str | None = None

    @classmethod
    def success(
        cls,
        packages: frozenset[PackageSet],
        dependencies: frozenset[PackageId],
        project_version: str | None = None,
    ) -> ResolverResult:
        return cls(
            ok=True,
            packages=packages,
            dependencies=dependencies,
            project_version=project_version,
        )

    @classmethod
    def failure(cls, reason: str) -> ResolverResult:
        return cls(ok=False, reason=reason)


@runtime_checkable
class ManifestResolver(Protocol):
    """Interface that every manifest resolver must satisfy."""

    resolver_name: str

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult: ...


@dataclass
class PackageGraphBuilder:
    """Accumulate packages and direct dependencies while reading a manifest."""

    _edges: dict[PackageId, set[PackageId]] = field(default_factory=dict)
    _direct: set[PackageId] = field(default_factory=set)

    def add_package(self, package_id: PackageId, requires: set[PackageId] | None = None) -> None:
        self._edges.setdefault(package_id, set()).update(requires or ())

    def add_dependency(self, package_id: PackageId) -> None:
        """Record *package_id* as directly required by the project."""
        self._direct.add(package_id)
        self._edges.setdefault(package_id, set())

    def result(self, project_version: str | None = None) -> ResolverResult:
        packages = frozenset(
            PackageSet(package_id=pid, dependencies=frozenset(deps))
            for pid, deps in self._edges.items()
        )
        return ResolverResult.success(packages, frozenset(self._direct), project_version)


def lowest_version(version_range: str | None) -> str | None:
    """Return the lower bound of a NuGet version range.

    ``"1.0"`` and ``"[1.0, 2.0)"`` both give ``"1.0"``; a range with no lower
    bound such as ``"(, 2.0]"`` gives None.
    """
    if version_range is None:
        return None
    text = version_range.strip()
    if not text:
        return None
    if text[0] in "[(":
        lower = text[1:].rstrip("])").split(",")[0].strip()
        return lower or None
    return text
