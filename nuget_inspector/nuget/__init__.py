"""NuGet package-registry collaborators."""

from nuget_inspector.nuget.search import DEFAULT_PACKAGES_REPO_URL, NugetSearchService

__all__ = ["DEFAULT_PACKAGES_REPO_URL", "NugetSearchService"]
