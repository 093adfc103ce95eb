#!/usr/bin/env python3

"""Error types raised while creating a vendor patch.

Each error carries the process exit code the CLI should terminate with.
"""


class PatchToolError(Exception):
    """Base class for all failures surfaced to the user."""

    exit_code = 1


class InputError(PatchToolError):
    """Malformed or missing package identifier, or bad option."""

    exit_code = 2


class ToolEnvironmentError(PatchToolError):
    """Missing external tool, not inside a git work tree, or no manifest."""

    exit_code = 3


class ResolutionError(PatchToolError):
    """Package directory not found at the computed location."""

    exit_code = 4

    def __init__(self, path: str, package_type: str):
        self.path = path
        self.package_type = package_type
        super().__init__(f"Package not found at: {path} (type: {package_type})")


class UserAbort(PatchToolError):
    """User declined to continue at the confirmation prompt."""

    exit_code = 5


class EmptyChangeError(PatchToolError):
    """No modified files were found under the package location."""

    exit_code = 6


class RegistryError(PatchToolError):
    """composer.json could not be updated; the patch file was kept."""

    exit_code = 7

    def __init__(self, message: str, patch_path: str | None = None):
        self.patch_path = patch_path
        if patch_path:
            message = (
                f"{message}\nThe patch file was written to {patch_path}; "
                "add it to extra.patches in composer.json manually."
            )
        super().__init__(message)


class VcsError(PatchToolError):
    """A git command exited with a non-zero status."""

    exit_code = 8

    def __init__(self, command: list[str], returncode: int, stderr: str = "", cwd: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.cwd = cwd
        detail = stderr.strip()
        message = f"Command {' '.join(command)} failed with exit status {returncode}"
        if cwd:
            message += f" (in {cwd})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
