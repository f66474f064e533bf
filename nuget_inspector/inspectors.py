"""Project and solution inspectors — build the Container tree for a target."""

from __future__ import annotations

import os
import time
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from nuget_inspector.dispatch import ResolverDispatch
from nuget_inspector.exceptions import ConfigurationError
from nuget_inspector.models import (
    Container,
    ContainerKind,
    InspectionResult,
    ProjectReference,
    ResultStatus,
)
from nuget_inspector.module_filter import is_excluded
from nuget_inspector.options import InspectionOptions, for_project, resolve_options
from nuget_inspector.output_paths import find_output_paths
from nuget_inspector.solution import parse_solution

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

log = structlog.get_logger("nuget_inspector.inspector")

SOLUTION_EXTENSIONS = frozenset({".sln"})


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class ProjectInspector:
    """Inspect a single project file."""

    def __init__(
        self,
        options: InspectionOptions | None,
        nuget_service: NugetSearchService | None = None,
        dispatch: ResolverDispatch | None = None,
    ) -> None:
        if options is None:
            raise ConfigurationError("Must provide a valid options object.")
        self.options = resolve_options(options)
        self.dispatch = dispatch or ResolverDispatch(nuget_service=nuget_service)

    def inspect(self) -> InspectionResult:
        """Inspect the project, honouring ``ignore_failure`` at this scope."""
        opts = self.options
        try:
            container = self.get_container()
        except Exception as exc:
            if opts.ignore_failure:
                log.warning(
                    "inspector.project_failed_ignored",
                    project=opts.project_name,
                    error=str(exc),
                    exc_info=True,
                )
                return InspectionResult(
                    status=ResultStatus.SUCCESS,
                    result_name=opts.project_unique_id,
                    output_directory=opts.output_directory,
                )
            log.error("inspector.project_failed", project=opts.project_name, exc_info=True)
            return InspectionResult(status=ResultStatus.ERROR, error=exc)

        return InspectionResult(
            status=ResultStatus.SUCCESS,
            result_name=opts.project_unique_id,
            output_directory=opts.output_directory,
            containers=[container] if container is not None else [],
        )

    def get_container(self) -> Container | None:
        """Build the project's container, or None when the project is filtered out."""
        opts = self.options
        if is_excluded(opts.project_name or "", opts.included_modules, opts.excluded_modules):
            log.info("inspector.project_excluded", project=opts.project_name)
            return None
        return self.build_container()

    def build_container(self) -> Container:
        opts = self.options
        start = time.monotonic()
        log.info(
            "inspector.project_started",
            project=opts.project_name,
            project_directory=opts.project_directory,
        )

        output_paths = find_output_paths(opts.target_path)
        outcome = self.dispatch.resolve(opts)

        container = Container(
            name=opts.project_unique_id or opts.project_name or Path(opts.target_path).stem,
            version=outcome.project_version or opts.version_name,
            source_path=opts.target_path,
            kind=ContainerKind.PROJECT,
            output_paths=tuple(output_paths),
            packages=outcome.packages,
            dependencies=outcome.dependencies,
        )
        log.info(
            "inspector.project_finished",
            project=opts.project_name,
            resolver=outcome.resolver_name,
            dependencies=len(outcome.dependencies),
            packages=len(outcome.packages),
            duration_ms=_elapsed_ms(start),
        )
        return container


def _duplicates(values: Iterable[str]) -> frozenset[str]:
    return frozenset(value for value, count in Counter(values).items() if count > 1)


class SolutionInspector:
    """Inspect a solution file and every eligible member project."""

    def __init__(
        self,
        options: InspectionOptions | None,
        nuget_service: NugetSearchService | None = None,
        dispatch: ResolverDispatch | None = None,
    ) -> None:
        if options is None:
            raise ConfigurationError("Must provide a valid options object.")
        self.options = resolve_options(options)
        self.nuget_service = nuget_service
        self.dispatch = dispatch or ResolverDispatch(nuget_service=nuget_service)

    def inspect(self) -> InspectionResult:
        """Inspect the solution; a failure here is never downgraded."""
        opts = self.options
        try:
            container = self.get_container()
        except Exception as exc:
            log.error("inspector.solution_failed", solution=opts.target_path, exc_info=True)
            return InspectionResult(status=ResultStatus.ERROR, error=exc)

        return InspectionResult(
            status=ResultStatus.SUCCESS,
            result_name=opts.solution_name,
            output_directory=opts.output_directory,
            containers=[container],
        )

    def get_container(self) -> Container:
        opts = self.options
        start = time.monotonic()
        log.info("inspector.solution_started", solution=opts.target_path)

        references = parse_solution(opts.target_path)
        children: list[Container] = []
        if not references:
            log.info("inspector.solution_empty", solution=opts.target_path)
        else:
            children = self._inspect_members(references)

        solution = Container(
            name=opts.solution_name or Path(opts.target_path).stem,
            source_path=opts.target_path,
            kind=ContainerKind.SOLUTION,
            children=tuple(children),
        )
        log.info(
            "inspector.solution_finished",
            solution=opts.target_path,
            children=len(children),
            duration_ms=_elapsed_ms(start),
        )
        return solution

    def _inspect_members(self, references: list[ProjectReference]) -> list[Container]:
        solution_directory = Path(self.options.target_path).resolve().parent
        log.debug("inspector.solution_directory", path=str(solution_directory))

        duplicate_names = _duplicates(r.name for r in references)
        duplicate_paths = _duplicates(r.relative_path for r in references)

        children: list[Container] = []
        for reference in references:
            try:
                child = self._inspect_member(
                    reference, solution_directory, duplicate_names, duplicate_paths
                )
            except Exception as exc:
                if not self.options.ignore_failure:
                    raise
                log.warning(
                    "inspector.member_failed_ignored",
                    project=reference.relative_path,
                    error=str(exc),
                    exc_info=True,
                )
                continue
            if child is not None:
                children.append(child)
        return children

    def _inspect_member(
        self,
        reference: ProjectReference,
        solution_directory: Path,
        duplicate_names: frozenset[str],
        duplicate_paths: frozenset[str],
    ) -> Container | None:
        project_path = os.path.normpath(solution_directory / reference.relative_path)

        project_id = reference.name
        if reference.name in duplicate_names:
            log.info(
                "inspector.duplicate_name",
                name=reference.name,
                guid=reference.project_guid,
            )
            project_id = reference.project_guid
        if reference.relative_path in duplicate_paths:
            log.info("inspector.duplicate_path", path=reference.relative_path)

        try:
            exists = os.path.isfile(project_path)
        except (OSError, ValueError):
            log.info("inspector.project_path_unknown", path=project_path)
            return None
        if not exists:
            log.info("inspector.project_missing", path=project_path)
            return None

        opts = self.options
        if is_excluded(reference.name, opts.included_modules, opts.excluded_modules):
            log.info("inspector.project_excluded", project=reference.name)
            return None

        project_options = for_project(
            opts,
            target_path=project_path,
            project_name=reference.name,
            project_unique_id=project_id,
        )
        inspector = ProjectInspector(
            project_options, nuget_service=self.nuget_service, dispatch=self.dispatch
        )
        return inspector.build_container()


def create_inspector(
    options: InspectionOptions | None,
    nuget_service: NugetSearchService | None = None,
    dispatch: ResolverDispatch | None = None,
) -> ProjectInspector | SolutionInspector:
    """Pick the solution or project inspector from the target's extension."""
    if options is None:
        raise ConfigurationError("Must provide a valid options object.")
    if Path(options.target_path).suffix.lower() in SOLUTION_EXTENSIONS:
        return SolutionInspector(options, nuget_service=nuget_service, dispatch=dispatch)
    return ProjectInspector(options, nuget_service=nuget_service, dispatch=dispatch)


def inspect(
    options: InspectionOptions | None,
    nuget_service: NugetSearchService | None = None,
    dispatch: ResolverDispatch | None = None,
) -> InspectionResult:
    return create_inspector(options, nuget_service=nuget_service, dispatch=dispatch).inspect()
