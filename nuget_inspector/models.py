"""Data models for the inspection result tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class PackageId:
    """A NuGet package identity, unique by (name, version)."""

    name: str
    version: str | None = None


@dataclass(frozen=True)
class PackageSet:
    """A package together with the packages it directly requires."""

    package_id: PackageId
    dependencies: frozenset[PackageId] = frozenset()


class ContainerKind(Enum):
    PROJECT = "Project"
    SOLUTION = "Solution"


@dataclass(frozen=True)
class Container:
    """One inspected solution or project.

    ``packages`` and ``dependencies`` are ``None`` when resolution never ran
    and an empty frozenset when it ran and found nothing.
    """

    name: str
    source_path: str
    kind: ContainerKind
    version: str | None = None
    output_paths: tuple[str, ...] = ()
    packages: frozenset[PackageSet] | None = None
    dependencies: frozenset[PackageId] | None = None
    children: tuple[Container, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is ContainerKind.PROJECT and self.children:
            raise ValueError(f"project container {self.name!r} cannot have children")
        for child in self.children:
            if child.kind is not ContainerKind.PROJECT:
                raise ValueError(
                    f"solution container {self.name!r} may only hold project children"
                )

    @property
    def resolved(self) -> bool:
        return self.packages is not None and self.dependencies is not None


@dataclass(frozen=True)
class ProjectReference:
    """A ``Project(...)`` entry parsed out of a solution file."""

    name: str
    relative_path: str
    type_guid: str
    project_guid: str


class ResultStatus(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class InspectionResult:
    """Envelope returned by an inspector's ``inspect()``."""

    status: ResultStatus
    result_name: str | None = None
    output_directory: str | None = None
    containers: list[Container] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ResultStatus.SUCCESS
