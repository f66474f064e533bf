"""Shared pytest fixtures and fakes for nuget-inspector tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from nuget_inspector.models import PackageId
from nuget_inspector.resolvers.base import PackageGraphBuilder, ResolverResult

CSHARP_TYPE_GUID = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"
FOLDER_TYPE_GUID = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"

SDK_PROJECT = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
  </PropertyGroup>
  <ItemGroup>
    <PackageReference Include="Newtonsoft.Json" Version="13.0.3" />
  </ItemGroup>
</Project>
"""


class FakeResolver:
    """Resolver double that records calls and returns (or raises) a canned outcome."""

    def __init__(
        self,
        name: str,
        result: ResolverResult | None = None,
        error: Exception | None = None,
    ) -> None:
        self.resolver_name = name
        self.calls: list[Path] = []
        self._error = error
        if result is None:
            builder = PackageGraphBuilder()
            builder.add_dependency(PackageId(f"{name}.Package", "1.0.0"))
            result = builder.result()
        self._result = result

    def resolve(self, manifest_path, project_name, nuget_service=None):
        self.calls.append(Path(manifest_path))
        if self._error is not None:
            raise self._error
        return self._result


def project_line(name: str, path: str, guid: str, type_guid: str = CSHARP_TYPE_GUID) -> str:
    return f'Project("{type_guid}") = "{name}", "{path}", "{guid}"\nEndProject\n'


def write_solution(directory: Path, *lines: str, name: str = "App.sln") -> Path:
    header = (
        "﻿\n"
        "Microsoft Visual Studio Solution File, Format Version 12.00\n"
        "# Visual Studio Version 17\n"
    )
    path = directory / name
    path.write_text(header + "".join(lines) + "Global\nEndGlobal\n", encoding="utf-8")
    return path


def write_project(directory: Path, name: str, content: str = SDK_PROJECT) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.csproj"
    path.write_text(content)
    return path


@pytest.fixture
def sdk_project(tmp_path: Path) -> Path:
    return write_project(tmp_path / "App", "App")
