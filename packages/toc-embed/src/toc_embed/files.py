# SPDX-License-Identifier: MIT
"""Text file access shared by the manifest and script rewriters."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# Bytes that are not valid in the encoding survive a read and write unchanged
DECODE_ERRORS = "surrogateescape"


def split_lines(content: str) -> list[str]:
    """Split text on any of the three newline conventions."""
    return LINE_BREAK_PATTERN.split(content)


def join_lines(lines: list[str]) -> str:
    """Join lines with a single consistent line terminator."""
    return "\n".join(lines)


def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a whole file without translating its newlines.

    Undecodable bytes (Latin-1 scripts, for one) are kept as surrogates so
    that atomic_write puts them back unchanged.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    with open(path, encoding=encoding, errors=DECODE_ERRORS, newline="") as fh:
        return fh.read()


def atomic_write(path: str | Path, data: str, encoding: str = "utf-8") -> None:
    """Atomically replace *path* with *data*."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding=encoding,
        errors=DECODE_ERRORS,
        newline="",
        delete=False,
        dir=p.parent,
    ) as fh:
        fh.write(data)
    try:
        os.replace(fh.name, p)
    except OSError:
        logger.error("atomic_write failed for %s", p)
        os.unlink(fh.name)
        raise
