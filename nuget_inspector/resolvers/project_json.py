"""Resolver for project.json files (pre-MSBuild .NET Core projects)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult, lowest_version
from nuget_inspector.resolvers.project_lock_json import load_json

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService


def _declared(dependencies: dict[str, Any]) -> list[PackageId]:
    found: list[PackageId] = []
    for name, spec in dependencies.items():
        if isinstance(spec, dict):
            # "type": "project" entries are sibling projects, not packages
            if spec.get("type") == "project" or spec.get("target") == "project":
                continue
            version = spec.get("version")
        else:
            version = spec
        found.append(PackageId(name, lowest_version(version)))
    return found


class ProjectJsonResolver:
    resolver_name = "project-json"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        data = load_json(manifest_path)
        builder = PackageGraphBuilder()

        declared = _declared(data.get("dependencies") or {})
        for framework in (data.get("frameworks") or {}).values():
            if isinstance(framework, dict):
                declared.extend(_declared(framework.get("dependencies") or {}))

        for package_id in declared:
            builder.add_dependency(package_id)

        return builder.result()
