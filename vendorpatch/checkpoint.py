#!/usr/bin/env python3

import logging

from pydantic import BaseModel, ConfigDict

from vendorpatch.git import Git

logger = logging.getLogger(__name__)


class ChangeCapture(BaseModel):
    """Brackets a manual edit session on a package directory.

    Entering the context force-stages the directory so the index holds the
    pre-edit snapshot; leaving it restores the working copy from that
    snapshot and unstages it again, whether or not an error occurred.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    git: Git
    location: str
    staged: bool = False

    def stage(self) -> None:
        """Snapshot the current state of the package into the index."""
        self.git.force_add(self.location)
        self.staged = True

    def modified_files(self) -> list[str]:
        if not self.staged:
            raise RuntimeError("Package directory not staged before reading changes.")
        return self.git.modified_files(self.location)

    def diff(self) -> str:
        if not self.staged:
            raise RuntimeError("Package directory not staged before diffing.")
        return self.git.diff(self.location)

    def restore(self) -> None:
        """Put the package back to the staged snapshot and unstage it."""
        if not self.staged:
            return
        self.git.restore(self.location)
        self.git.unstage(self.location)
        self.staged = False
        logger.debug("Restored and unstaged %s", self.location)

    def __enter__(self):
        self.stage()
        return self

    def __exit__(self, exc_type, _exc_val, _exc_tb):
        if exc_type is not None and self.staged:
            logger.info("Restoring %s after %s", self.location, exc_type.__name__)
        self.restore()
