"""Resolver dispatch — pick the manifest to trust for one project."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from nuget_inspector.exceptions import ResolutionError
from nuget_inspector.models import PackageId, PackageSet
from nuget_inspector.options import InspectionOptions
from nuget_inspector.resolvers import (
    ManifestResolver,
    PackagesConfigResolver,
    ProjectAssetsJsonResolver,
    ProjectJsonResolver,
    ProjectLockJsonResolver,
    ProjectReferenceResolver,
    ProjectXmlResolver,
    ResolverResult,
)

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

log = structlog.get_logger("nuget_inspector.dispatch")


@dataclass(frozen=True)
class ManifestStrategy:
    """Use *resolver* when the manifest named by the *option* field exists."""

    option: str
    resolver: ManifestResolver


# Priority order: first manifest present wins
DEFAULT_STRATEGIES: tuple[ManifestStrategy, ...] = (
    ManifestStrategy("packages_config_path", PackagesConfigResolver()),
    ManifestStrategy("project_json_lock_path", ProjectLockJsonResolver()),
    ManifestStrategy("project_assets_json_path", ProjectAssetsJsonResolver()),
    ManifestStrategy("project_json_path", ProjectJsonResolver()),
)


@dataclass(frozen=True)
class DispatchOutcome:
    resolver_name: str
    packages: frozenset[PackageSet]
    dependencies: frozenset[PackageId]
    project_version: str | None = None


def manifest_exists(path: str | None) -> bool:
    return path is not None and bool(path.strip()) and os.path.isfile(path)


class ResolverDispatch:
    """Delegate a project to exactly one resolver.

    The manifest strategies are tried in order by file existence only. When
    none of the manifests exist, the reference resolver runs and the XML
    resolver is used only if it reports failure.
    """

    def __init__(
        self,
        strategies: tuple[ManifestStrategy, ...] = DEFAULT_STRATEGIES,
        reference_resolver: ManifestResolver | None = None,
        xml_resolver: ManifestResolver | None = None,
        nuget_service: NugetSearchService | None = None,
    ) -> None:
        self._strategies = strategies
        self._reference_resolver = reference_resolver or ProjectReferenceResolver()
        self._xml_resolver = xml_resolver or ProjectXmlResolver()
        self._nuget_service = nuget_service

    def select(self, options: InspectionOptions) -> ManifestStrategy | None:
        """Return the first strategy whose manifest exists, or None."""
        for strategy in self._strategies:
            if manifest_exists(getattr(options, strategy.option)):
                return strategy
        return None

    def resolve(self, options: InspectionOptions) -> DispatchOutcome:
        project_name = options.project_name or Path(options.target_path).stem
        strategy = self.select(options)

        if strategy is not None:
            manifest = Path(getattr(options, strategy.option))
            log.info(
                "dispatch.selected",
                project=project_name,
                resolver=strategy.resolver.resolver_name,
                manifest=str(manifest),
            )
            result = self._run(strategy.resolver, manifest, project_name)
            return self._outcome(strategy.resolver, result)

        target = Path(options.target_path)
        log.info("dispatch.trying_reference_resolver", project=project_name, target=str(target))
        result = self._run(self._reference_resolver, target, project_name)
        if result.ok:
            return self._outcome(self._reference_resolver, result)

        log.info(
            "dispatch.xml_fallback",
            project=project_name,
            reason=result.reason,
        )
        result = self._run(self._xml_resolver, target, project_name)
        if not result.ok:
            raise ResolutionError(
                f"No resolver could handle project {project_name}: {result.reason}"
            )
        return self._outcome(self._xml_resolver, result, keep_version=True)

    def _run(
        self, resolver: ManifestResolver, manifest: Path, project_name: str
    ) -> ResolverResult:
        try:
            return resolver.resolve(manifest, project_name, self._nuget_service)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(
                f"{resolver.resolver_name} resolver failed on {manifest}: {exc}"
            ) from exc

    @staticmethod
    def _outcome(
        resolver: ManifestResolver, result: ResolverResult, keep_version: bool = False
    ) -> DispatchOutcome:
        return DispatchOutcome(
            resolver_name=resolver.resolver_name,
            packages=result.packages,
            dependencies=result.dependencies,
            project_version=result.project_version if keep_version else None,
        )
