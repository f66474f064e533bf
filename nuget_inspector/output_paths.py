"""Best-effort discovery of per-configuration build output directories."""

from __future__ import annotations

import os
import re
from pathlib import Path

import structlog

from nuget_inspector.exceptions import ProbeError
from nuget_inspector.resolvers.msbuild import child_text, iter_elements, load_project

log = structlog.get_logger("nuget_inspector.output_paths")

# '$(Configuration)|$(Platform)' == 'Debug|AnyCPU'  /  '$(Configuration)' == 'Release'
_CONDITION_RE = re.compile(
    r"'\s*(?P<lhs>[^']*)\s*'\s*==\s*'\s*(?P<rhs>[^']*)\s*'"
)


def _configuration_of(condition: str | None) -> str | None:
    if not condition:
        return None
    m = _CONDITION_RE.search(condition)
    if not m:
        return None
    keys = [k.strip() for k in m.group("lhs").split("|")]
    values = [v.strip() for v in m.group("rhs").split("|")]
    for key, value in zip(keys, values):
        if key == "$(Configuration)" and value:
            return value
    return None


def _evaluate(project_path: Path) -> list[str]:
    try:
        root = load_project(project_path)
    except Exception as exc:
        raise ProbeError(f"unable to load {project_path}: {exc}") from exc

    default_output: str | None = None
    configured: dict[str, str | None] = {}
    for group in iter_elements(root, "PropertyGroup"):
        configuration = _configuration_of(group.get("Condition"))
        output = child_text(group, "OutputPath")
        if configuration is None:
            if output and not group.get("Condition"):
                default_output = output
            continue
        if configured.get(configuration) is None:
            configured[configuration] = output

    project_directory = project_path.resolve().parent
    paths: list[str] = []
    for configuration, output in configured.items():
        relative = output or default_output or f"bin/{configuration}/"
        relative = relative.replace("$(Configuration)", configuration).replace("\\", "/")
        full_path = os.path.normpath(project_directory / relative)
        paths.append(full_path)
        log.debug("output_paths.found", configuration=configuration, path=full_path)
    return paths


def find_output_paths(project_path: str | Path) -> list[str]:
    """Return one output directory per configuration declared by the project.

    Never raises: any failure is logged and gives an empty list.
    """
    try:
        paths = _evaluate(Path(project_path))
    except Exception as exc:
        log.info("output_paths.skipped", project=str(project_path), error=str(exc))
        return []
    log.debug("output_paths.done", project=str(project_path), count=len(paths))
    return paths
