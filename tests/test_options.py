"""Tests for option defaulting and assembly version lookup."""

from __future__ import annotations

import os
from pathlib import Path

from nuget_inspector.assembly_info import find_assembly_version
from nuget_inspector.options import (
    DEFAULT_OUTPUT_DIRECTORY,
    InspectionOptions,
    for_project,
    resolve_options,
)


class TestResolveOptions:
    def test_derives_paths_from_target(self, sdk_project: Path):
        opts = resolve_options(InspectionOptions(target_path=str(sdk_project)))
        project_dir = str(sdk_project.resolve().parent)

        assert opts.project_directory == project_dir
        assert opts.packages_config_path == os.path.join(project_dir, "packages.config")
        assert opts.project_json_path == os.path.join(project_dir, "project.json")
        assert opts.project_json_lock_path == os.path.join(project_dir, "project.lock.json")
        assert opts.project_assets_json_path == os.path.join(
            project_dir, "obj", "project.assets.json"
        )
        assert opts.project_name == "App"
        assert opts.project_unique_id == "App"
        assert opts.output_directory == os.path.join(os.getcwd(), DEFAULT_OUTPUT_DIRECTORY)
        assert opts.version_name is None

    def test_explicit_values_are_kept(self, sdk_project: Path, tmp_path: Path):
        raw = InspectionOptions(
            target_path=str(sdk_project),
            project_directory=str(tmp_path / "elsewhere"),
            packages_config_path="/custom/packages.config",
            project_name="Named",
            project_unique_id="{GUID}",
            version_name="9.9.9",
            output_directory=str(tmp_path / "out"),
        )
        opts = resolve_options(raw)
        assert opts.project_directory == str(tmp_path / "elsewhere")
        assert opts.packages_config_path == "/custom/packages.config"
        assert opts.project_json_path == os.path.join(str(tmp_path / "elsewhere"), "project.json")
        assert opts.project_name == "Named"
        assert opts.project_unique_id == "{GUID}"
        assert opts.version_name == "9.9.9"
        assert opts.output_directory == str(tmp_path / "out")

    def test_idempotent(self, sdk_project: Path):
        once = resolve_options(InspectionOptions(target_path=str(sdk_project)))
        assert resolve_options(once) == once

    def test_relative_target_made_absolute(self, sdk_project: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        opts = resolve_options(InspectionOptions(target_path=os.path.join("App", "App.csproj")))
        assert os.path.isabs(opts.target_path)
        assert opts.target_path == str(sdk_project.resolve())
        assert resolve_options(opts) == opts

    def test_blank_strings_are_defaulted(self, sdk_project: Path):
        opts = resolve_options(InspectionOptions(target_path=str(sdk_project), project_name="  "))
        assert opts.project_name == "App"

    def test_version_from_assembly_info(self, sdk_project: Path):
        props = sdk_project.parent / "Properties"
        props.mkdir()
        (props / "AssemblyInfo.cs").write_text('[assembly: AssemblyVersion("2.1.0.0")]\n')
        opts = resolve_options(InspectionOptions(target_path=str(sdk_project)))
        assert opts.version_name == "2.1.0.0"


class TestForProject:
    def test_inherits_and_overrides(self, tmp_path: Path):
        parent = resolve_options(
            InspectionOptions(
                target_path=str(tmp_path / "App.sln"),
                output_directory=str(tmp_path / "out"),
                included_modules="Core",
                excluded_modules="Tests",
                ignore_failure=True,
                verbose=True,
                packages_repo_url="https://feed.example/v3/index.json",
            )
        )
        child_path = str(tmp_path / "src" / "Core" / "Core.csproj")
        child = for_project(parent, child_path, "Core", "{GUID}")

        assert child.target_path == child_path
        assert child.project_name == "Core"
        assert child.project_unique_id == "{GUID}"
        assert child.project_directory == str(Path(child_path).resolve().parent)
        assert child.output_directory == str(tmp_path / "out")
        assert child.included_modules == "Core"
        assert child.excluded_modules == "Tests"
        assert child.ignore_failure is True
        assert child.verbose is True
        assert child.packages_repo_url == "https://feed.example/v3/index.json"
        # Parent is untouched
        assert parent.project_name == "App"


class TestFindAssemblyVersion:
    def test_none_without_assembly_info(self, tmp_path: Path):
        assert find_assembly_version(tmp_path) is None

    def test_vb_attribute(self, tmp_path: Path):
        folder = tmp_path / "My Project"
        folder.mkdir()
        (folder / "AssemblyInfo.vb").write_text('<Assembly: AssemblyVersion("1.4.0.0")>\n')
        assert find_assembly_version(tmp_path) == "1.4.0.0"

    def test_skips_wildcard_and_comments(self, tmp_path: Path):
        (tmp_path / "AssemblyInfo.cs").write_text(
            '// [assembly: AssemblyVersion("0.0.0.1")]\n'
            '[assembly: AssemblyVersion("1.0.*")]\n'
        )
        assert find_assembly_version(tmp_path) is None
