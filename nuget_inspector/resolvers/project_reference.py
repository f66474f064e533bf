"""Resolver for MSBuild ``PackageReference`` items declared in the project file."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult, lowest_version
from nuget_inspector.resolvers.msbuild import item_version, iter_elements, load_project

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

log = structlog.get_logger("nuget_inspector.resolver")

CENTRAL_VERSIONS_FILE = "Directory.Packages.props"


def find_central_versions(project_path: Path) -> dict[str, str]:
    """Read ``PackageVersion`` items from the nearest Directory.Packages.props."""
    for folder in project_path.resolve().parents:
        props = folder / CENTRAL_VERSIONS_FILE
        if not props.is_file():
            continue
        try:
            root = load_project(props)
        except (OSError, ET.ParseError) as exc:
            log.warning("resolver.central_versions_unreadable", path=str(props), error=str(exc))
            return {}
        versions: dict[str, str] = {}
        for element in iter_elements(root, "PackageVersion"):
            name = (element.get("Include") or "").strip()
            version = item_version(element)
            if name and version:
                versions[name.lower()] = version
        return versions
    return {}


class ProjectReferenceResolver:
    """Succeeds only for projects that declare ``PackageReference`` items."""

    resolver_name = "project-reference"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        try:
            root = load_project(manifest_path)
        except (OSError, ET.ParseError) as exc:
            return ResolverResult.failure(f"unable to load project file: {exc}")

        includes: dict[str, tuple[str, str | None]] = {}
        for element in iter_elements(root, "PackageReference"):
            include = (element.get("Include") or "").strip()
            if include:
                includes[include.lower()] = (include, item_version(element))
                continue
            # Update only changes metadata of an item already included
            update = (element.get("Update") or "").strip().lower()
            version = item_version(element)
            if update in includes and version is not None:
                includes[update] = (includes[update][0], version)

        if not includes:
            return ResolverResult.failure("no PackageReference items declared")

        central: dict[str, str] | None = None
        builder = PackageGraphBuilder()
        for name, version in includes.values():
            if version is None:
                if central is None:
                    central = find_central_versions(manifest_path)
                version = central.get(name.lower())
            package_id = PackageId(name, lowest_version(version))
            builder.add_dependency(package_id)
            if nuget_service is not None:
                requires = nuget_service.find_dependencies(package_id)
                if requires:
                    builder.add_package(package_id, set(requires))

        return builder.result()
