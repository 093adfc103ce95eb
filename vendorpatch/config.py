#!/usr/bin/env python3

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

CONFIG_FILE_NAME = "vendorpatch.json"


class ToolConfig(BaseModel):
    """Settings for creating patches in one Composer project."""

    project_root: Path = Field(default_factory=Path.cwd)

    # Relative to project root
    manifest_file: str = "composer.json"
    patches_dir: str = "patches"

    # Paths in the patch are relative to the package root unless set
    project_relative: bool = False

    # The single answer that means "changes are done, create the patch"
    confirm_answer: str = "y"

    required_tools: list[str] = Field(default_factory=lambda: ["git"])

    def manifest_path(self) -> Path:
        """Get the full path to composer.json."""
        return self.project_root / self.manifest_file

    def patches_path(self) -> Path:
        """Get the full path to the patches directory."""
        return self.project_root / self.patches_dir

    def patch_record_path(self, patch_name: str) -> str:
        """Path of a patch as recorded in composer.json."""
        return Path(self.patches_dir, patch_name).as_posix()

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ToolConfig":
        """Load configuration from a JSON file."""
        args = json.loads(config_path.read_text())
        args["project_root"] = config_path.parent
        return cls.model_validate(args)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        # project_root is derived from the file location
        data = self.model_dump(exclude={"project_root"})
        config_path.write_text(json.dumps(data, indent=2))

    @classmethod
    def find_project_config(cls, start_path: Path) -> Optional["ToolConfig"]:
        """Find configuration by searching up the directory tree."""
        current = start_path.resolve()
        while current != current.parent:
            config_file = current / CONFIG_FILE_NAME
            if config_file.exists():
                return cls.load_from_file(config_file)
            current = current.parent
        return None
