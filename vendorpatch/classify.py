#!/usr/bin/env python3

"""Determine a package's Composer ``type``.

A package that is already installed reports its own type through its
composer.json. For packages that are declared but not on disk yet, the type
is guessed from the package name using Drupal naming conventions.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from vendorpatch.manifest import ComposerManifest, load_json
from vendorpatch.package import PackageIdentifier

logger = logging.getLogger(__name__)

DEFAULT_TYPE = "library"


def candidate_dirs(package: PackageIdentifier) -> list[str]:
    """Directories that may hold the package, highest priority first."""
    name = package.name
    return [
        package.vendor_path(),
        f"web/modules/contrib/{name}",
        f"web/modules/custom/{name}",
        f"web/themes/contrib/{name}",
        f"web/themes/custom/{name}",
        f"web/profiles/contrib/{name}",
        f"web/profiles/custom/{name}",
        f"web/libraries/{name}",
        "web/core",
        f"drush/Commands/contrib/{name}",
    ]


NamingRule = tuple[Callable[[str], bool], str]

# Evaluated top to bottom, first match wins.
NAMING_RULES: tuple[NamingRule, ...] = (
    (lambda pkg: pkg.startswith("drupal/core"), "drupal-core"),
    (lambda pkg: pkg.startswith("drupal-library/"), "drupal-library"),
    (lambda pkg: pkg.startswith("bower-asset/"), "drupal-library"),
    (lambda pkg: pkg.startswith("drupal/") and "theme" in pkg, "drupal-theme"),
    (lambda pkg: pkg.startswith("drupal/"), "drupal-module"),
    (lambda pkg: pkg.startswith("drush/") or "drush" in pkg, "drupal-drush"),
)


def infer_type_from_name(
    package: PackageIdentifier,
    rules: tuple[NamingRule, ...] = NAMING_RULES,
    default: str = DEFAULT_TYPE,
) -> str:
    name = str(package)
    for predicate, package_type in rules:
        if predicate(name):
            return package_type
    return default


def read_installed_type(package_dir: Path) -> str | None:
    """Type declared by an installed package, or None if it has no composer.json."""
    manifest = package_dir / "composer.json"
    if not manifest.is_file():
        return None
    try:
        package_type = load_json(manifest).get("type")
    except ValueError:
        logger.warning("Unreadable %s, assuming type %s", manifest, DEFAULT_TYPE)
        return DEFAULT_TYPE
    if not isinstance(package_type, str) or not package_type:
        return DEFAULT_TYPE
    return package_type


def classify_package(
    project_root: Path,
    package: PackageIdentifier,
    manifest: ComposerManifest | None = None,
) -> str:
    """Return the Composer type of ``package``."""
    for candidate in candidate_dirs(package):
        package_type = read_installed_type(project_root / candidate)
        if package_type is not None:
            logger.debug("Type of %s read from %s: %s", package, candidate, package_type)
            return package_type

    if manifest is not None and manifest.is_declared(package):
        package_type = infer_type_from_name(package)
        logger.debug("Type of %s inferred from its name: %s", package, package_type)
        return package_type

    return DEFAULT_TYPE
