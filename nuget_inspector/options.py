"""Inspection options and the defaulting rules applied before inspection."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from nuget_inspector.assembly_info import find_assembly_version

DEFAULT_OUTPUT_DIRECTORY = "nuget-inspector-output"

PACKAGES_CONFIG = "packages.config"
PROJECT_JSON = "project.json"
PROJECT_LOCK_JSON = "project.lock.json"
PROJECT_ASSETS_JSON = os.path.join("obj", "project.assets.json")


@dataclass(frozen=True)
class InspectionOptions:
    """Configuration for one inspected solution or project.

    Instances are immutable; build the effective options with
    :func:`resolve_options` and derive per-project options from a solution's
    with :func:`for_project`.
    """

    target_path: str
    project_directory: str | None = None
    output_directory: str | None = None
    packages_config_path: str | None = None
    project_json_path: str | None = None
    project_json_lock_path: str | None = None
    project_assets_json_path: str | None = None
    project_name: str | None = None
    project_unique_id: str | None = None
    solution_name: str | None = None
    version_name: str | None = None
    included_modules: str | None = None
    excluded_modules: str | None = None
    ignore_failure: bool = False
    verbose: bool = False
    packages_repo_url: str | None = None


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def resolve_options(options: InspectionOptions) -> InspectionOptions:
    """Fill every blank field from the target path.

    Explicitly supplied values are never overwritten, so applying this
    twice yields the same options.
    """
    target = Path(options.target_path)
    stem = target.stem
    changes: dict[str, str | None] = {}

    if not target.is_absolute():
        changes["target_path"] = str(target.resolve())

    project_directory = options.project_directory
    if _blank(project_directory):
        project_directory = str(target.resolve().parent)
        changes["project_directory"] = project_directory

    defaults = {
        "packages_config_path": os.path.join(project_directory, PACKAGES_CONFIG),
        "project_json_path": os.path.join(project_directory, PROJECT_JSON),
        "project_json_lock_path": os.path.join(project_directory, PROJECT_LOCK_JSON),
        "project_assets_json_path": os.path.join(project_directory, PROJECT_ASSETS_JSON),
        "project_name": stem,
        "project_unique_id": stem,
        "solution_name": stem,
        "output_directory": os.path.join(os.getcwd(), DEFAULT_OUTPUT_DIRECTORY),
    }
    for name, value in defaults.items():
        if _blank(getattr(options, name)):
            changes[name] = value

    if _blank(options.version_name):
        version = find_assembly_version(project_directory)
        if version is not None:
            changes["version_name"] = version

    if not changes:
        return options
    return replace(options, **changes)


def for_project(
    parent: InspectionOptions,
    target_path: str,
    project_name: str,
    project_unique_id: str,
) -> InspectionOptions:
    """Derive resolved options for one member project of a solution."""
    child = InspectionOptions(
        target_path=target_path,
        project_name=project_name,
        project_unique_id=project_unique_id,
        output_directory=parent.output_directory,
        included_modules=parent.included_modules,
        excluded_modules=parent.excluded_modules,
        ignore_failure=parent.ignore_failure,
        verbose=parent.verbose,
        packages_repo_url=parent.packages_repo_url,
    )
    return resolve_options(child)
