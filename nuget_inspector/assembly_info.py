"""Read the assembly version a project declares in its AssemblyInfo source."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

log = structlog.get_logger("nuget_inspector.options")

_ASSEMBLY_INFO_NAMES = ("AssemblyInfo.cs", "AssemblyInfo.vb", "AssemblyInfo.fs")

# [assembly: AssemblyVersion("1.2.3.4")] / <Assembly: AssemblyVersion("1.2.3.4")>
_VERSION_RE = re.compile(
    r"^\s*[\[<]\s*assembly\s*:\s*AssemblyVersion(?:Attribute)?\s*\(\s*\"([^\"]+)\"",
    re.IGNORECASE | re.MULTILINE,
)


def find_assembly_version(project_directory: str | Path) -> str | None:
    """Return the ``AssemblyVersion`` declared under *project_directory*.

    ``Properties/`` (C#) and ``My Project/`` (VB) are searched before the
    project root. Returns None when no AssemblyInfo file declares a version.
    """
    root = Path(project_directory)
    candidates: list[Path] = []
    for folder in (root / "Properties", root / "My Project", root):
        for name in _ASSEMBLY_INFO_NAMES:
            candidates.append(folder / name)

    for path in candidates:
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as exc:
            log.debug("assembly_info.unreadable", path=str(path), error=str(exc))
            continue
        for match in _VERSION_RE.finditer(content):
            version = match.group(1).strip()
            # Wildcard versions are computed at build time
            if version and "*" not in version:
                return version
    return None
