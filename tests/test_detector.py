"""Tests for template auto-detection from project files."""

from __future__ import annotations

from pathlib import Path

import pytest

from git_ignore.detector import Detector, detect_templates


@pytest.mark.parametrize(
    ("file_name", "template"),
    [
        ("build.gradle", "java"),
        ("pom.xml", "java"),
        ("package.json", "node"),
        ("requirements.txt", "python"),
        ("git-ignore.cabal", "haskell"),
        ("stack.yaml", "haskell"),
        ("composer.json", "php"),
        ("git-ignore.gemspec", "ruby"),
        ("Gemfile", "ruby"),
        ("Cargo.toml", "rust"),
    ],
)
def test_detects_from_marker_file(tmp_path: Path, file_name: str, template: str) -> None:
    (tmp_path / file_name).write_text("")
    assert detect_templates(tmp_path) == [template]


def test_directories_do_not_count(tmp_path: Path) -> None:
    (tmp_path / "Cargo.toml").mkdir()
    assert detect_templates(tmp_path) == []


def test_multiple_templates_in_detector_order(tmp_path: Path) -> None:
    for name in ["Cargo.toml", "package.json", "pom.xml", "build.gradle"]:
        (tmp_path / name).write_text("")
    assert detect_templates(tmp_path) == ["java", "node", "rust"]


def test_nested_files_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "Cargo.toml").write_text("")
    assert detect_templates(tmp_path) == []


def test_missing_directory(tmp_path: Path) -> None:
    assert detect_templates(tmp_path / "missing") == []


def test_custom_detectors(tmp_path: Path) -> None:
    (tmp_path / "main.tf").write_text("")
    detectors = [Detector("terraform", ["*.tf"])]
    assert detect_templates(tmp_path, detectors) == ["terraform"]


def test_detector_matches_exact_names_only() -> None:
    detector = Detector("node", ["package.json"])
    assert detector.detects(["package.json"])
    assert not detector.detects(["package.json.bak", "my-package.json"])


@pytest.mark.parametrize("file_name", [".cabal", ".gemspec"])
def test_bare_extension_dotfiles_are_ignored(tmp_path: Path, file_name: str) -> None:
    (tmp_path / file_name).write_text("")
    assert detect_templates(tmp_path) == []
