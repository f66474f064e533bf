"""Include/exclude filtering of projects by name."""

from __future__ import annotations

import regex
import structlog

from nuget_inspector.exceptions import PatternError

log = structlog.get_logger("nuget_inspector.filter")

# Seconds allowed for a single pattern match
MATCH_TIMEOUT = 60.0


def _split(modules: str | None) -> list[str]:
    if modules is None or not modules.strip():
        return []
    return modules.split(",")


def matches_pattern(project_name: str, pattern: str) -> bool:
    """Literal comparison first, then *pattern* as a regex searched in the name.

    A pattern that does not compile, or whose match exceeds
    :data:`MATCH_TIMEOUT`, is logged and counts as no match.
    """
    name = project_name.strip()
    # Legacy behaviour: an entry equal to the name after trimming always matches
    if pattern.strip() == name:
        return True
    try:
        return regex.search(pattern, name, timeout=MATCH_TIMEOUT) is not None
    except (regex.error, TimeoutError) as exc:
        err = PatternError(pattern, str(exc))
        log.warning(
            "filter.pattern_unusable",
            pattern=pattern,
            error=str(err),
            hint="the entry is still compared literally to the project name",
        )
        return False


def is_excluded(
    project_name: str,
    included_modules: str | None,
    excluded_modules: str | None,
) -> bool:
    """Decide whether *project_name* is out of scope.

    ``included_modules`` and ``excluded_modules`` are comma-separated lists of
    literal names or regular expressions. An include list, when present,
    takes precedence and the exclude list is ignored.
    """
    included = _split(included_modules)
    excluded = _split(excluded_modules)

    if not included and not excluded:
        return False

    if included:
        for pattern in included:
            if matches_pattern(project_name, pattern):
                return False
        return True

    for pattern in excluded:
        if matches_pattern(project_name, pattern):
            return True
    return False
