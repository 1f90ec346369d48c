# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_repo(make_addon, write_registry, repo_dir: Path) -> Path:
    """Create a repository where Foo depends on the embeddable library Bar."""
    make_addon(
        "Bar",
        tocs={"": "## Title: Bar\n## Version: 1.0.0\n\nBar.lua\n"},
        files={"Bar.lua": "Bar = {}\n"},
        embeddable=True,
    )
    make_addon(
        "Foo",
        tocs={"": "## Title: Foo\n## Dependencies: Bar\n\nFoo.lua\n"},
        files={"Foo.lua": "Foo = Foo or {}\nBar.greet()\n"},
    )
    write_registry(["Foo", "Bar"])
    return repo_dir
