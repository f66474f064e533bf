"""Resolver for obj/project.assets.json files written by ``dotnet restore``."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from nuget_inspector.resolvers.base import ResolverResult
from nuget_inspector.resolvers.project_lock_json import LockGraph, load_json

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService


class ProjectAssetsJsonResolver:
    resolver_name = "project-assets-json"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        data = load_json(manifest_path)
        graph = LockGraph(data)
        graph.add_dependency_groups(data)

        # Restore metadata also lists the declared references per framework
        frameworks = (data.get("project") or {}).get("frameworks") or {}
        for framework in frameworks.values():
            for name, spec in ((framework or {}).get("dependencies") or {}).items():
                if isinstance(spec, dict):
                    if spec.get("target", "Package") != "Package":
                        continue
                    graph.add_direct(name, spec.get("version"))
                else:
                    graph.add_direct(name, spec)
        return graph.builder.result()
