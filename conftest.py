# SPDX-License-Identifier: MIT
"""Pytest fixtures shared by the engine, CLI and flow tests."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

from toc_embed.config import DEFAULT_RUNTIME_URL


class FakeSourceControl:
    """SourceControl double that copies sibling AddOns instead of cloning."""

    def __init__(self, addon_path: Path, addons_dir: Path) -> None:
        self.addon_path = addon_path
        self.addons_dir = addons_dir
        self.added: list[tuple[str, str]] = []
        self.updates = 0

    def add_subtree(self, url: str, destination: str) -> None:
        self.added.append((url, destination))
        target = self.addon_path / destination
        if url == DEFAULT_RUNTIME_URL:
            target.mkdir(parents=True)
            (target / "Library.toc").write_text("## Title: Library\n## Version: 2.0.0\n\nLibrary.lua\n")
            (target / "Library.lua").write_text("Library = Library or {}\n")
        else:
            name = url.rsplit("/", 1)[-1].removesuffix(".git")
            shutil.copytree(self.addons_dir / name, target)

    def update_subtrees(self) -> None:
        self.updates += 1


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Create an empty repository root."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def addons_dir(repo_dir: Path) -> Path:
    """Create the directory holding the repository's AddOns."""
    addons = repo_dir / "AddOns"
    addons.mkdir()
    return addons


@pytest.fixture
def make_addon(addons_dir: Path) -> Callable[..., Path]:
    """Return a factory creating an AddOn directory.

    Args (of the factory):
        name: AddOn name
        tocs: Mapping of flavor suffix to manifest text
        files: Mapping of relative path to file content
        embeddable: Whether to add the libs/Library marker
        parent: Directory to create the AddOn in (defaults to AddOns/)
    """

    def _make(
        name: str,
        tocs: Optional[dict[str, str]] = None,
        files: Optional[dict[str, str]] = None,
        embeddable: bool = False,
        parent: Optional[Path] = None,
    ) -> Path:
        root = (parent or addons_dir) / name
        root.mkdir(parents=True, exist_ok=True)
        for suffix, text in (tocs or {}).items():
            (root / f"{name}{suffix}.toc").write_text(text)
        for relative, content in (files or {}).items():
            file_path = root / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
        if embeddable:
            (root / "libs" / "Library").mkdir(parents=True, exist_ok=True)
        return root

    return _make


@pytest.fixture
def write_registry(repo_dir: Path) -> Callable[[list[str]], Path]:
    """Return a function writing a .gitmodules file for the given AddOn names."""

    def _write(names: list[str]) -> Path:
        blocks = [
            f'[submodule "AddOns/{name}"]\n'
            f"\tpath = AddOns/{name}\n"
            f"\turl = https://github.com/example/{name}.git\n"
            for name in names
        ]
        registry = repo_dir / ".gitmodules"
        registry.write_text("".join(blocks))
        return registry

    return _write


@pytest.fixture
def fake_source_control() -> Callable[[Path], FakeSourceControl]:
    """Return a factory for FakeSourceControl bound to an AddOn."""

    def _make(addon_path: Path) -> FakeSourceControl:
        return FakeSourceControl(addon_path, addon_path.parent)

    return _make


@pytest.fixture
def copying_git_backend(monkeypatch: pytest.MonkeyPatch) -> list[FakeSourceControl]:
    """Replace the git backend of embed_libraries; returns the instances created."""
    created: list[FakeSourceControl] = []

    def _factory(addon_path: Path) -> FakeSourceControl:
        source_control = FakeSourceControl(addon_path, addon_path.parent)
        created.append(source_control)
        return source_control

    monkeypatch.setattr("toc_embed.orchestrator.GitSubmodules", _factory)
    return created


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Drop the handlers the CLI installs on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
