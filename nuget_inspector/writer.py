"""Serialize an InspectionResult to the JSON document read by downstream tooling."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

from nuget_inspector.models import Container, InspectionResult, PackageId, PackageSet

log = structlog.get_logger("nuget_inspector.writer")

RESULT_FILE_SUFFIX = "_inspection.json"


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class PackageIdOutput(_Schema):
    name: str
    version: str | None = None

    @classmethod
    def from_model(cls, package_id: PackageId) -> PackageIdOutput:
        return cls(name=package_id.name, version=package_id.version)


class PackageSetOutput(_Schema):
    package_id: PackageIdOutput
    dependencies: list[PackageIdOutput]

    @classmethod
    def from_model(cls, package_set: PackageSet) -> PackageSetOutput:
        return cls(
            package_id=PackageIdOutput.from_model(package_set.package_id),
            dependencies=_sorted_ids(package_set.dependencies),
        )


class ContainerOutput(_Schema):
    name: str
    version: str | None = None
    source_path: str
    type: str
    output_paths: list[str]
    packages: list[PackageSetOutput] | None = None
    dependencies: list[PackageIdOutput] | None = None
    children: list[ContainerOutput]

    @classmethod
    def from_model(cls, container: Container) -> ContainerOutput:
        packages = None
        if container.packages is not None:
            packages = [
                PackageSetOutput.from_model(p)
                for p in sorted(container.packages, key=lambda p: _sort_key(p.package_id))
            ]
        dependencies = None
        if container.dependencies is not None:
            dependencies = _sorted_ids(container.dependencies)
        return cls(
            name=container.name,
            version=container.version,
            source_path=container.source_path,
            type=container.kind.value,
            output_paths=list(container.output_paths),
            packages=packages,
            dependencies=dependencies,
            children=[cls.from_model(child) for child in container.children],
        )


ContainerOutput.model_rebuild()


class InspectionOutput(_Schema):
    name: str
    containers: list[ContainerOutput]

    @classmethod
    def from_result(cls, result: InspectionResult) -> InspectionOutput:
        return cls(
            name=result.result_name or "",
            containers=[ContainerOutput.from_model(c) for c in result.containers],
        )


def _sort_key(package_id: PackageId) -> tuple[str, str]:
    return (package_id.name.lower(), package_id.version or "")


def _sorted_ids(ids: frozenset[PackageId]) -> list[PackageIdOutput]:
    return [PackageIdOutput.from_model(pid) for pid in sorted(ids, key=_sort_key)]


def result_path(result: InspectionResult) -> Path:
    if not result.output_directory or not result.result_name:
        raise ValueError("result has no output directory or name to write to")
    return Path(result.output_directory) / f"{result.result_name}{RESULT_FILE_SUFFIX}"


def write_result(result: InspectionResult) -> Path:
    """Write *result* as ``<output_directory>/<result_name>_inspection.json``."""
    path = result_path(result)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = InspectionOutput.from_result(result)
    path.write_text(document.model_dump_json(by_alias=True, indent=2) + "\n")
    log.info("writer.result_written", path=str(path), containers=len(result.containers))
    return path
