"""Resolver for legacy packages.config files."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from nuget_inspector.exceptions import ResolutionError
from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult
from nuget_inspector.resolvers.msbuild import iter_elements

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

log = structlog.get_logger("nuget_inspector.resolver")


class PackagesConfigResolver:
    """packages.config lists every installed package flat.

    Edges between the listed packages come from the registry search service
    when one is supplied; packages not required by another listed package
    are the project's direct dependencies.
    """

    resolver_name = "packages-config"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        try:
            root = ET.fromstring(manifest_path.read_text(encoding="utf-8-sig"))
        except (OSError, ET.ParseError) as exc:
            raise ResolutionError(f"Unable to read {manifest_path}: {exc}") from exc

        installed: dict[str, PackageId] = {}
        for element in iter_elements(root, "package"):
            package_name = (element.get("id") or "").strip()
            if not package_name:
                continue
            version = (element.get("version") or "").strip() or None
            installed[package_name.lower()] = PackageId(package_name, version)

        builder = PackageGraphBuilder()
        required: set[PackageId] = set()
        for package_id in installed.values():
            requires: set[PackageId] = set()
            if nuget_service is not None:
                for dep in nuget_service.find_dependencies(package_id) or ():
                    # Point the edge at the version actually installed
                    match = installed.get(dep.name.lower())
                    if match is not None and match != package_id:
                        requires.add(match)
            builder.add_package(package_id, requires)
            required.update(requires)

        for package_id in installed.values():
            if package_id not in required:
                builder.add_dependency(package_id)

        log.debug(
            "resolver.packages_config",
            project=project_name,
            packages=len(installed),
            registry=nuget_service is not None,
        )
        return builder.result()
