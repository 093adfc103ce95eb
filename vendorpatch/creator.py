#!/usr/bin/env python3

"""Create a patch for one vendor package.

The run goes: check environment, classify, resolve, stage, wait for the
user to edit and confirm, diff, rewrite paths, restore, register in
composer.json. Every failure before registration leaves the working tree
and composer.json as they were.
"""

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel
from rich.markup import escape

from vendorpatch.checkpoint import ChangeCapture
from vendorpatch.classify import classify_package
from vendorpatch.config import ToolConfig
from vendorpatch.console import Console, Prompter
from vendorpatch.errors import (
    EmptyChangeError,
    InputError,
    PatchToolError,
    ToolEnvironmentError,
    UserAbort,
)
from vendorpatch.git import Git
from vendorpatch.manifest import ComposerManifest
from vendorpatch.package import PackageIdentifier
from vendorpatch.patch import rewrite_patch_paths
from vendorpatch.resolve import locate_package

logger = logging.getLogger(__name__)


class PatchRequest(BaseModel):
    """What the user asked for on the command line."""

    package: str
    patch_name: str | None = None
    description: str | None = None
    project_relative: bool = False


class PatchResult(BaseModel):
    package: str
    package_type: str
    location: str
    modified_files: list[str]
    patch_file: Path
    record_path: str
    description: str | None = None


def default_patch_name(package: PackageIdentifier, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"patch_{package.namespace}_{package.name}_{stamp}.patch"


def check_environment(config: ToolConfig, git: Git) -> None:
    """Fail with ToolEnvironmentError unless the project can be patched."""
    missing = [tool for tool in config.required_tools if shutil.which(tool) is None]
    if missing:
        raise ToolEnvironmentError(
            "Missing required dependencies:\n"
            + "\n".join(f"  - {tool}" for tool in missing)
            + "\nPlease install the missing dependencies before running this command."
        )
    if not git.is_inside_work_tree():
        raise ToolEnvironmentError(f"{config.project_root} is not inside a git repository.")
    if not config.manifest_path().is_file():
        raise ToolEnvironmentError(
            f"{config.manifest_file} not found in {config.project_root}."
        )


class PatchCreator:
    """Runs the patch creation workflow once."""

    def __init__(
        self,
        config: ToolConfig,
        prompter: Prompter,
        console: Console | None = None,
        git: Git | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.prompter = prompter
        self.console = console or Console()
        self.git = git or Git(config.project_root)
        self.clock = clock

    def create(self, request: PatchRequest) -> PatchResult:
        package = PackageIdentifier.parse(request.package)
        root = self.config.project_root

        check_environment(self.config, self.git)
        manifest = ComposerManifest.load(self.config.manifest_path())

        package_type = classify_package(root, package, manifest)
        location = locate_package(root, package, manifest.installer_path_rules(), package_type)
        logger.info("Resolved %s (type %s) to %s", package, package_type, location)

        self.console.print(f"[green]Staging package files for patch at: {escape(location)}[/green]")
        with ChangeCapture(git=self.git, location=location) as capture:
            self.console.done()
            self.console.print(
                f"[green]📝 Modify the required files for package: {package} at {escape(location)}[/green]"
            )

            if not self.prompter.confirm_changes():
                raise UserAbort("Patch creation aborted.")

            modified = capture.modified_files()
            if not modified:
                raise EmptyChangeError(
                    f"No modified files found in package: {package} at {location}"
                )
            self.console.print("[green]Modified files:[/green]")
            for path in modified:
                self.console.print(f"  {escape(path)}")

            patch_name = request.patch_name or self.prompter.ask(
                "Enter patch file name (press Enter for the default "
                f"patch_{package.namespace}_{package.name}_<date>.patch)"
            )
            patch_name = patch_name or default_patch_name(package, self.clock())
            patch_file = self.config.patches_path() / patch_name
            if patch_file.exists():
                raise InputError(f"Patch file already exists: {patch_file}")
            description = request.description or self.prompter.ask(
                "Enter patch description (optional, press Enter to skip)"
            )
            description = description or None

            self.console.print(f"[green]Creating patch file: {escape(patch_name)}...[/green]")
            diff_text = capture.diff()
            project_relative = request.project_relative or self.config.project_relative
            if not project_relative:
                self.console.print("[green]Converting patch to vendor-relative paths...[/green]")
            diff_text = rewrite_patch_paths(diff_text, location, project_relative)

            self.console.print("[green]Restoring/Un-staging the modified files...[/green]")

        self.console.done()

        try:
            patch_file.parent.mkdir(parents=True, exist_ok=True)
            patch_file.write_text(
                diff_text, encoding="utf-8", errors="surrogateescape", newline=""
            )
        except OSError as e:
            raise PatchToolError(f"Could not write patch file {patch_file}: {e}") from e
        logger.info("Wrote %s", patch_file)

        record_path = self.config.patch_record_path(patch_name)
        manifest.register_patch(package, record_path, description)
        self.console.print(f"[green]Updated {self.config.manifest_file} with new patch[/green]")

        return PatchResult(
            package=str(package),
            package_type=package_type,
            location=location,
            modified_files=modified,
            patch_file=patch_file,
            record_path=record_path,
            description=description,
        )
