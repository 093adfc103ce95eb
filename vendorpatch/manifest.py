#!/usr/bin/env python3

"""Reading and updating composer.json.

Only two subtrees matter here: ``extra.installer-paths`` (read-only) and
``extra.patches`` (the patch registry consumed by cweagans/composer-patches).
Everything else is carried through untouched.
"""

import copy
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, NamedTuple

from vendorpatch.errors import RegistryError, ToolEnvironmentError
from vendorpatch.package import PackageIdentifier

logger = logging.getLogger(__name__)

MANIFEST_INDENT = 4


class InstallerPathRule(NamedTuple):
    """One ``extra.installer-paths`` entry: a directory template and its selectors."""

    template: str
    targets: tuple[str, ...]

    def matches_type(self, package_type: str) -> bool:
        return f"type:{package_type}" in self.targets


def load_json(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


def dump_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=MANIFEST_INDENT, ensure_ascii=False) + "\n"


def add_patch_entry(
    document: dict[str, Any],
    package: str,
    patch_path: str,
    description: str | None = None,
) -> dict[str, Any]:
    """Return a copy of ``document`` with ``patch_path`` registered for ``package``.

    Existing entries are extended, never replaced. Without a description the
    entry is a list of paths; with one it is a mapping of description to path.
    When the two shapes meet, the list is converted to a mapping keyed by the
    paths themselves so no earlier patch is lost.
    """
    updated = copy.deepcopy(document)
    extra = updated.setdefault("extra", {})
    if not isinstance(extra, dict):
        raise ValueError("composer.json 'extra' is not an object")
    patches = extra.setdefault("patches", {})
    if not isinstance(patches, dict):
        raise ValueError("composer.json 'extra.patches' is not an object")

    entry = patches.get(package)
    if entry is None:
        entry = {} if description else []
    elif not isinstance(entry, (list, dict)):
        raise ValueError(f"extra.patches[{package!r}] is neither a list nor an object")

    if description:
        if isinstance(entry, list):
            entry = {path: path for path in entry}
        if patch_path not in entry.values():
            entry[_unique_key(entry, description)] = patch_path
    elif isinstance(entry, list):
        if patch_path not in entry:
            entry.append(patch_path)
    elif patch_path not in entry.values():
        entry[patch_path] = patch_path

    patches[package] = entry
    return updated


def _unique_key(entry: dict[str, str], description: str) -> str:
    # A repeated description must not replace the patch already recorded under it.
    key = description
    counter = 2
    while key in entry:
        key = f"{description} ({counter})"
        counter += 1
    return key


class ComposerManifest:
    """In-memory view of a project's composer.json."""

    def __init__(self, path: Path, document: dict[str, Any]):
        self.path = path
        self.document = document

    @classmethod
    def load(cls, path: Path) -> "ComposerManifest":
        if not path.is_file():
            raise ToolEnvironmentError(f"{path.name} not found in {path.parent}")
        try:
            return cls(path, load_json(path))
        except ValueError as e:
            raise ToolEnvironmentError(f"Could not parse {path}: {e}") from e

    @property
    def extra(self) -> dict[str, Any]:
        extra = self.document.get("extra")
        return extra if isinstance(extra, dict) else {}

    def installer_path_rules(self) -> list[InstallerPathRule]:
        """Rules from ``extra.installer-paths`` in declared order."""
        raw = self.extra.get("installer-paths") or {}
        if not isinstance(raw, dict):
            return []
        rules = []
        for template, targets in raw.items():
            if isinstance(targets, str):
                targets = [targets]
            if not isinstance(targets, list):
                continue
            rules.append(InstallerPathRule(template, tuple(str(t) for t in targets)))
        return rules

    def is_declared(self, package: PackageIdentifier) -> bool:
        """True if the package is listed in ``require`` or ``require-dev``."""
        name = str(package)
        for section in ("require", "require-dev"):
            deps = self.document.get(section)
            if isinstance(deps, dict) and name in deps:
                return True
        return False

    def patches_for(self, package: PackageIdentifier) -> list[str] | dict[str, str] | None:
        patches = self.extra.get("patches")
        if not isinstance(patches, dict):
            return None
        return patches.get(str(package))

    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def temp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def register_patch(
        self,
        package: PackageIdentifier,
        patch_path: str,
        description: str | None = None,
    ) -> None:
        """Record a patch in ``extra.patches`` and rewrite composer.json atomically.

        A ``.bak`` copy of the manifest is taken before anything else. On any
        failure the manifest is restored from it and RegistryError is raised.
        """
        backup = self.backup_path()
        temp = self.temp_path()
        try:
            shutil.copy2(self.path, backup)
        except OSError as e:
            raise RegistryError(f"Failed to back up {self.path.name}: {e}", patch_path) from e

        try:
            updated = add_patch_entry(self.document, str(package), patch_path, description)
            temp.write_text(dump_json(updated), encoding="utf-8")
            os.replace(temp, self.path)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Updating %s failed, restoring backup: %s", self.path, e)
            shutil.copy2(backup, self.path)
            temp.unlink(missing_ok=True)
            raise RegistryError(f"Failed to update {self.path.name}: {e}", patch_path) from e

        self.document = updated
        logger.info("Registered %s for %s in %s", patch_path, package, self.path)
