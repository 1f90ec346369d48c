# SPDX-License-Identifier: MIT
"""Tests for vendored library discovery."""

import pytest

from toc_embed.library import (
    LibraryVersionError,
    discover_libraries,
    library_versions,
    read_library_version,
    require_library_versions,
)
from toc_embed.version import Version


class TestDiscoverLibraries:
    """Tests for discover_libraries."""

    def test_lists_versioned_libraries(self, make_addon):
        foo = make_addon(
            "Foo",
            files={
                "libs/Library/Library.toc": "## Version: 2.0.0\n",
                "libs/Zed/Zed.toc": "## Version: 0.3.1\n",
                "libs/Bar/Bar.toc": "## Title: Bar\n## Version: v1.2\n",
            },
        )

        libraries = discover_libraries(foo)

        assert [(library.name, library.version) for library in libraries] == [
            ("Bar", Version(1, 2, 0)),
            ("Zed", Version(0, 3, 1)),
        ]
        assert libraries[0].path == foo / "libs" / "Bar"

    def test_skips_libraries_without_version(self, make_addon):
        foo = make_addon(
            "Foo",
            files={
                "libs/NoToc/NoToc.lua": "",
                "libs/NoVersion/NoVersion.toc": "## Title: X\n",
                "libs/Bad/Bad.toc": "## Version: @project-version@\n",
                "libs/README.md": "",
            },
        )

        assert discover_libraries(foo) == []

    def test_no_vendor_folder(self, make_addon):
        assert discover_libraries(make_addon("Foo")) == []

    def test_flavor_manifest_version(self, make_addon):
        """A library with only flavor manifests still has a version."""
        bar = make_addon("Bar", tocs={"_Wrath": "## Version: 3.1.4\n"})
        assert read_library_version(bar) == Version(3, 1, 4)


class TestLibraryVersions:
    """Tests for library_versions."""

    def test_read_only_lookup(self, make_addon):
        foo = make_addon("Foo", files={"libs/Bar/Bar.toc": "## Version: 1.0.0\n"})

        versions = library_versions(discover_libraries(foo))

        assert dict(versions) == {"Bar": Version(1, 0, 0)}
        with pytest.raises(TypeError):
            versions["Baz"] = Version(1, 0, 0)  # type: ignore[index]


class TestRequireLibraryVersions:
    """Tests for require_library_versions."""

    def test_reads_sibling_versions(self, make_addon):
        make_addon("Bar", tocs={"": "## Version: 1.2.0\n"})
        make_addon("Baz", tocs={"_Wrath": "## Version: v0.4\n"})
        foo = make_addon("Foo")

        versions = require_library_versions(foo, ["Bar", "Baz"])

        assert dict(versions) == {"Bar": Version(1, 2, 0), "Baz": Version(0, 4, 0)}

    @pytest.mark.parametrize(
        "toc", [None, "## Title: Bar\n", "## Version: @project-version@\n"]
    )
    def test_unusable_version_raises(self, make_addon, toc):
        make_addon("Bar", tocs={"": toc} if toc else None)
        foo = make_addon("Foo")

        with pytest.raises(LibraryVersionError, match='"Bar"') as exc_info:
            require_library_versions(foo, ["Bar"])

        assert exc_info.value.name == "Bar"
