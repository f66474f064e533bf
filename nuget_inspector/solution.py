"""Parser for Visual Studio solution (.sln) files."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from nuget_inspector.exceptions import NotFoundError
from nuget_inspector.models import ProjectReference

log = structlog.get_logger("nuget_inspector.solution")

SOLUTION_FOLDER_TYPE_GUID = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"

EXCLUDED_PROJECT_TYPE_GUIDS = frozenset({SOLUTION_FOLDER_TYPE_GUID})

# Project("{TYPE-GUID}") = "Name", "Relative\Path.csproj", "{PROJECT-GUID}"
_PROJECT_LINE_RE = re.compile(
    r'^Project\(\s*"(?P<type_guid>[^"]*)"\s*\)\s*=\s*'
    r'"(?P<name>[^"]*)"\s*,\s*'
    r'"(?P<path>[^"]*)"\s*,\s*'
    r'"(?P<guid>[^"]*)"'
)


def parse_project_line(line: str) -> ProjectReference | None:
    """Parse one ``Project(`` line, or return None if it is malformed."""
    m = _PROJECT_LINE_RE.match(line.strip())
    if not m:
        return None
    return ProjectReference(
        name=m.group("name").strip(),
        relative_path=m.group("path").strip().replace("\\", "/"),
        type_guid=m.group("type_guid").strip(),
        project_guid=m.group("guid").strip(),
    )


def parse_solution(
    solution_path: str | Path,
    excluded_type_guids: frozenset[str] = EXCLUDED_PROJECT_TYPE_GUIDS,
) -> list[ProjectReference]:
    """Return the member projects of a solution in file order.

    Solution folders and other pseudo-projects whose type GUID is in
    *excluded_type_guids* are dropped.

    Raises :class:`NotFoundError` if the solution file does not exist.
    """
    path = Path(solution_path)
    if not path.is_file():
        raise NotFoundError(f"Solution file {solution_path} not found")

    excluded = {g.upper() for g in excluded_type_guids}
    lines = path.read_text(encoding="utf-8-sig", errors="replace").splitlines()
    project_lines = [line for line in lines if line.startswith("Project(")]

    projects: list[ProjectReference] = []
    for line in project_lines:
        reference = parse_project_line(line)
        if reference is None:
            log.debug("solution.malformed_project_line", line=line)
            continue
        if reference.type_guid.upper() in excluded:
            continue
        projects.append(reference)

    log.info(
        "solution.parsed",
        solution=str(path),
        project_elements=len(project_lines),
        projects=len(projects),
    )
    return projects
