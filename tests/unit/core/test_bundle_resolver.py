"""Tests for template bundle discovery."""

import os
from pathlib import Path

import pytest

from cfn_deploy.api.exceptions import BundleError, MissingMainTemplateError
from cfn_deploy.core import load_bundle, resolve_bundle


class TestResolveBundle:
    def test_lists_files_recursively(self, template_dir: Path) -> None:
        files = resolve_bundle(template_dir)
        assert sorted(f.relative_to(template_dir).as_posix() for f in files) == [
            "Stack.json",
            "nested/Child.json",
            "params.json",
        ]

    def test_paths_are_prefixed_with_root(self, template_dir: Path) -> None:
        for file_path in resolve_bundle(template_dir):
            assert file_path.parts[:len(template_dir.parts)] == template_dir.parts

    def test_directories_are_excluded(self, template_dir: Path) -> None:
        (template_dir / "empty").mkdir()
        files = resolve_bundle(template_dir)
        assert all(f.is_file() for f in files)
        assert len(files) == 3

    def test_accepts_string_path(self, template_dir: Path) -> None:
        assert len(resolve_bundle(str(template_dir))) == 3

    def test_missing_folder(self, tmp_path: Path) -> None:
        with pytest.raises(BundleError):
            resolve_bundle(tmp_path / "nope")

    def test_file_instead_of_folder(self, template_dir: Path) -> None:
        with pytest.raises(BundleError):
            resolve_bundle(template_dir / "Stack.json")

    def test_dangling_symlink(self, template_dir: Path) -> None:
        os.symlink(template_dir / "gone.json", template_dir / "Dangling.json")
        with pytest.raises(BundleError):
            resolve_bundle(template_dir)

    def test_symlinked_directory_is_followed(self, template_dir: Path, tmp_path: Path) -> None:
        shared = tmp_path / "shared-templates"
        shared.mkdir()
        (shared / "Shared.json").write_text("{}")
        os.symlink(shared, template_dir / "shared")

        files = resolve_bundle(template_dir)

        assert sorted(f.relative_to(template_dir).as_posix() for f in files) == [
            "Stack.json",
            "nested/Child.json",
            "params.json",
            "shared/Shared.json",
        ]

    def test_symlinked_file_is_included(self, template_dir: Path, tmp_path: Path) -> None:
        target = tmp_path / "outside.json"
        target.write_text("{}")
        os.symlink(target, template_dir / "Linked.json")
        assert template_dir / "Linked.json" in resolve_bundle(template_dir)

    def test_directory_link_loop(self, template_dir: Path) -> None:
        os.symlink(template_dir, template_dir / "nested" / "back")
        with pytest.raises(BundleError):
            resolve_bundle(template_dir)


class TestLoadBundle:
    def test_main_template_present(self, template_dir: Path) -> None:
        bundle = load_bundle(template_dir, "Stack.json")
        assert bundle.main_template_path == template_dir / "Stack.json"
        assert len(bundle) == 3

    def test_nested_main_template(self, template_dir: Path) -> None:
        bundle = load_bundle(template_dir, "nested/Child.json")
        assert bundle.contains(template_dir / "nested" / "Child.json")

    def test_main_template_missing(self, template_dir: Path) -> None:
        with pytest.raises(MissingMainTemplateError) as exc_info:
            load_bundle(template_dir, "Main.yaml")
        assert "Main.yaml" in str(exc_info.value)
