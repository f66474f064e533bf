"""Fallback resolver reading legacy assembly references from the project XML."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING

from nuget_inspector.exceptions import ResolutionError
from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult
from nuget_inspector.resolvers.msbuild import child_text, iter_elements, load_project

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

# packages\<Id>.<Version>\lib\... -> (Id, Version)
_PACKAGE_FOLDER_RE = re.compile(
    r"^(?P<name>.+?)\.(?P<version>\d+(?:\.\d+){1,3}(?:-[0-9A-Za-z.-]+)?)$"
)


def package_from_hint_path(hint_path: str) -> PackageId | None:
    """Extract the package identity from a ``HintPath`` under a packages folder."""
    parts = PureWindowsPath(hint_path.strip()).parts
    for index, part in enumerate(parts[:-1]):
        if part.lower() == "packages":
            m = _PACKAGE_FOLDER_RE.match(parts[index + 1])
            if m:
                return PackageId(m.group("name"), m.group("version"))
    return None


class ProjectXmlResolver:
    """Reads ``Reference`` items whose HintPath points into a NuGet packages folder.

    Also reports the project's own ``Version`` property when declared.
    """

    resolver_name = "project-xml"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        try:
            root = load_project(manifest_path)
        except (OSError, ET.ParseError) as exc:
            raise ResolutionError(f"Unable to read project file {manifest_path}: {exc}") from exc

        builder = PackageGraphBuilder()
        for element in iter_elements(root, "Reference"):
            hint_path = child_text(element, "HintPath")
            if hint_path is None:
                continue
            package_id = package_from_hint_path(hint_path)
            if package_id is not None:
                builder.add_dependency(package_id)

        project_version = None
        for group in iter_elements(root, "PropertyGroup"):
            project_version = child_text(group, "Version")
            if project_version:
                break

        return builder.result(project_version=project_version)
