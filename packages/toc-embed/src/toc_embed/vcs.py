# SPDX-License-Identifier: MIT
"""Source control operations used for vendoring, backed by git submodules."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import EmbedError

logger = logging.getLogger(__name__)


class SourceControlError(EmbedError):
    """Raised when a source control command fails."""

    def __init__(self, command: list[str], message: str) -> None:
        self.command = command
        super().__init__(f"{' '.join(command)} failed:\n{message}")


class SourceControl(Protocol):
    """Vendoring operations the embedding engine depends on."""

    def add_subtree(self, url: str, destination: str) -> None:
        """Track the repository at *url* under *destination*."""
        ...

    def update_subtrees(self) -> None:
        """Initialize and update all tracked subtrees recursively."""
        ...


class GitSubmodules:
    """SourceControl implementation running ``git submodule`` in a working tree."""

    def __init__(self, working_dir: str | Path, git_executable: str = "git") -> None:
        self.working_dir = Path(working_dir)
        self.git_executable = git_executable

    def _run(self, *args: str) -> None:
        cmd = [self.git_executable, *args]
        logger.info("Running %s in %s", " ".join(cmd), self.working_dir)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise SourceControlError(cmd, f"executable not found: {self.git_executable}") from None
        if result.returncode != 0:
            raise SourceControlError(cmd, f"{result.stderr}{result.stdout}")

    def add_subtree(self, url: str, destination: str) -> None:
        self._run("submodule", "add", url, destination)

    def update_subtrees(self) -> None:
        self._run("submodule", "update", "--init", "--recursive")
