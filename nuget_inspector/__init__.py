"""nuget-inspector: NuGet dependency graphs for .NET solutions and projects."""

__version__ = "0.1.0"

from nuget_inspector.dispatch import ResolverDispatch
from nuget_inspector.exceptions import (
    ConfigurationError,
    InspectorError,
    NotFoundError,
    ResolutionError,
)
from nuget_inspector.inspectors import (
    ProjectInspector,
    SolutionInspector,
    create_inspector,
    inspect,
)
from nuget_inspector.models import (
    Container,
    ContainerKind,
    InspectionResult,
    PackageId,
    PackageSet,
    ResultStatus,
)
from nuget_inspector.module_filter import is_excluded
from nuget_inspector.options import InspectionOptions, resolve_options

__all__ = [
    "ConfigurationError",
    "Container",
    "ContainerKind",
    "InspectionOptions",
    "InspectionResult",
    "InspectorError",
    "NotFoundError",
    "PackageId",
    "PackageSet",
    "ProjectInspector",
    "ResolutionError",
    "ResolverDispatch",
    "ResultStatus",
    "SolutionInspector",
    "create_inspector",
    "inspect",
    "is_excluded",
    "resolve_options",
]
