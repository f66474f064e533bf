"""Resolver for project.lock.json files (and the shared lock-file graph reader)."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from nuget_inspector.exceptions import ResolutionError
from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult, lowest_version

if TYPE_CHECKING:
    from nuget_inspector.nuget.search import NugetSearchService

# "Newtonsoft.Json >= 9.0.1" / "Newtonsoft.Json [9.0.1, )" / "Newtonsoft.Json"
_DEPENDENCY_GROUP_RE = re.compile(r"^(?P<name>[^\s<>=\[(]+)\s*(?:[<>=]+\s*)?(?P<range>.*)$")


def load_json(manifest_path: Path) -> dict[str, Any]:
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8-sig"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ResolutionError(f"Unable to read {manifest_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ResolutionError(f"{manifest_path} does not contain a JSON object")
    return data


def _split_key(key: str) -> tuple[str, str | None]:
    name, _, version = key.partition("/")
    return name, version or None


class LockGraph:
    """Package graph read from the ``targets`` section of a lock/assets file."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.builder = PackageGraphBuilder()
        # lower-cased name -> resolved PackageId, first target wins
        self.resolved: dict[str, PackageId] = {}
        self.project_names: set[str] = set()

        for key, library in (data.get("libraries") or {}).items():
            if isinstance(library, dict) and library.get("type") == "project":
                self.project_names.add(_split_key(key)[0].lower())

        for target in (data.get("targets") or {}).values():
            if isinstance(target, dict):
                self._read_target(target)

    def _read_target(self, target: dict[str, Any]) -> None:
        in_target: dict[str, PackageId] = {}
        entries: list[tuple[PackageId, dict[str, Any]]] = []
        for key, entry in target.items():
            if not isinstance(entry, dict) or entry.get("type") == "project":
                continue
            name, version = _split_key(key)
            if name.lower() in self.project_names:
                continue
            package_id = PackageId(name, version)
            in_target[name.lower()] = package_id
            self.resolved.setdefault(name.lower(), package_id)
            entries.append((package_id, entry))

        for package_id, entry in entries:
            requires: set[PackageId] = set()
            for dep_name, dep_range in (entry.get("dependencies") or {}).items():
                match = in_target.get(dep_name.lower())
                if match is None:
                    match = PackageId(dep_name, lowest_version(dep_range))
                requires.add(match)
            self.builder.add_package(package_id, requires)

    def add_direct(self, name: str, version_range: str | None) -> None:
        if name.lower() in self.project_names:
            return
        package_id = self.resolved.get(name.lower())
        if package_id is None:
            package_id = PackageId(name, lowest_version(version_range))
        self.builder.add_dependency(package_id)

    def add_dependency_groups(self, data: dict[str, Any]) -> None:
        for entries in (data.get("projectFileDependencyGroups") or {}).values():
            for text in entries or ():
                m = _DEPENDENCY_GROUP_RE.match(text.strip())
                if m:
                    self.add_direct(m.group("name"), m.group("range") or None)


class ProjectLockJsonResolver:
    resolver_name = "project-lock-json"

    def resolve(
        self,
        manifest_path: Path,
        project_name: str,
        nuget_service: NugetSearchService | None = None,
    ) -> ResolverResult:
        data = load_json(manifest_path)
        graph = LockGraph(data)
        graph.add_dependency_groups(data)
        return graph.builder.result()
