#!/usr/bin/env python3

"""Thin wrapper over the git commands used to capture a patch.

Every command is fail-fast: a non-zero exit raises VcsError.
"""

import logging
import subprocess
from pathlib import Path

from vendorpatch.errors import ToolEnvironmentError, VcsError

logger = logging.getLogger(__name__)


def _pathspec(path: str) -> str:
    return path.rstrip("/") + "/"


class Git:
    """Runs git in a fixed working directory."""

    def __init__(self, cwd: Path, executable: str = "git"):
        self.cwd = cwd
        self.executable = executable

    def run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        command = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(command), self.cwd)
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except FileNotFoundError as e:
            raise ToolEnvironmentError(f"{self.executable} is not installed") from e
        if check and result.returncode != 0:
            raise VcsError(command, result.returncode, result.stderr, str(self.cwd))
        return result

    def is_inside_work_tree(self) -> bool:
        result = self.run("rev-parse", "--is-inside-work-tree", check=False)
        return result.returncode == 0 and result.stdout.strip() == "true"

    def force_add(self, path: str) -> None:
        """Stage ``path`` even if it is ignored."""
        self.run("add", "--force", "--", _pathspec(path))

    def modified_files(self, path: str) -> list[str]:
        """Files under ``path`` whose working copy differs from the index."""
        result = self.run(
            "-c", "core.quotePath=false", "ls-files", "--modified", "--", _pathspec(path)
        )
        return [line for line in result.stdout.splitlines() if line]

    def diff(self, path: str) -> str:
        """Unified diff of ``path`` against the index, paths relative to cwd.

        Prefixes and path quoting are pinned so user settings such as
        ``diff.noprefix`` cannot change the header format.
        """
        result = self.run(
            "-c",
            "core.quotePath=false",
            "diff",
            "--no-color",
            "--no-ext-diff",
            "--src-prefix=a/",
            "--dst-prefix=b/",
            "--relative",
            "--",
            _pathspec(path),
        )
        return result.stdout

    def restore(self, path: str) -> None:
        """Reset the working copy of ``path`` to the index."""
        self.run("restore", "--", _pathspec(path))

    def unstage(self, path: str) -> None:
        self.run("reset", "--quiet", "HEAD", "--", _pathspec(path))
