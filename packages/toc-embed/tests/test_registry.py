# SPDX-License-Identifier: MIT
"""Tests for the submodule registry."""

from pathlib import Path

import pytest

from toc_embed.registry import RepositoryURLNotFoundError, SubmoduleRegistry, parse_submodules

GITMODULES = """[submodule "AddOns/Foo"]
\tpath = AddOns/Foo
\turl = https://github.com/example/Foo.git
[submodule "AddOns/Bar"]
\tpath = AddOns/Bar
url = https://github.com/example/Bar.git
"""


class TestParseSubmodules:
    """Tests for parse_submodules."""

    def test_indented_and_unindented_urls(self):
        assert dict(parse_submodules(GITMODULES)) == {
            "AddOns/Foo": "https://github.com/example/Foo.git",
            "AddOns/Bar": "https://github.com/example/Bar.git",
        }

    def test_last_entry_without_newline(self):
        content = '[submodule "X"]\n\tpath = X\n\turl = https://example.com/X.git'
        assert dict(parse_submodules(content)) == {"X": "https://example.com/X.git"}

    def test_crlf(self):
        content = '[submodule "X"]\r\n\tpath = X\r\n\turl = https://example.com/X.git\r\n'
        assert dict(parse_submodules(content)) == {"X": "https://example.com/X.git"}

    def test_read_only(self):
        mapping = parse_submodules(GITMODULES)
        with pytest.raises(TypeError):
            mapping["AddOns/Baz"] = "x"  # type: ignore[index]

    def test_empty(self):
        assert dict(parse_submodules("")) == {}


class TestSubmoduleRegistry:
    """Tests for SubmoduleRegistry."""

    def test_url_for_registered_path(self, repo_dir: Path):
        (repo_dir / ".gitmodules").write_text(GITMODULES)
        registry = SubmoduleRegistry.from_file(repo_dir / ".gitmodules")

        assert registry.url_for(repo_dir / "AddOns" / "Foo") == "https://github.com/example/Foo.git"

    def test_missing_path_raises(self, repo_dir: Path):
        (repo_dir / ".gitmodules").write_text(GITMODULES)
        registry = SubmoduleRegistry.from_file(repo_dir / ".gitmodules")

        with pytest.raises(RepositoryURLNotFoundError) as exc_info:
            registry.url_for(repo_dir / "AddOns" / "Baz")

        assert exc_info.value.path == "AddOns/Baz"
        assert "AddOns/Baz" in str(exc_info.value)

    def test_missing_file_is_empty(self, repo_dir: Path):
        registry = SubmoduleRegistry.from_file(repo_dir / ".gitmodules")

        assert dict(registry.urls) == {}
        with pytest.raises(RepositoryURLNotFoundError):
            registry.url_for(repo_dir / "AddOns" / "Foo")
