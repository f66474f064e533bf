"""Manifest resolvers — one per dependency manifest format."""

from nuget_inspector.resolvers.base import ManifestResolver, ResolverResult
from nuget_inspector.resolvers.packages_config import PackagesConfigResolver
from nuget_inspector.resolvers.project_assets_json import ProjectAssetsJsonResolver
from nuget_inspector.resolvers.project_json import ProjectJsonResolver
from nuget_inspector.resolvers.project_lock_json import ProjectLockJsonResolver
from nuget_inspector.resolvers.project_reference import ProjectReferenceResolver
from nuget_inspector.resolvers.project_xml import ProjectXmlResolver

__all__ = [
    "ManifestResolver",
    "PackagesConfigResolver",
    "ProjectAssetsJsonResolver",
    "ProjectJsonResolver",
    "ProjectLockJsonResolver",
    "ProjectReferenceResolver",
    "ProjectXmlResolver",
    "ResolverResult",
]
