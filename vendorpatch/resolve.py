#!/usr/bin/env python3

import logging
from collections.abc import Sequence
from pathlib import Path

from vendorpatch.errors import ResolutionError
from vendorpatch.manifest import InstallerPathRule
from vendorpatch.package import PackageIdentifier

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "{$name}"


def resolve_package_path(
    package: PackageIdentifier,
    rules: Sequence[InstallerPathRule],
    package_type: str,
) -> str:
    """Project-relative install directory for ``package``.

    The first installer-path rule targeting ``type:<package_type>`` wins;
    without one the package lives in ``vendor/<namespace>/<name>``.
    """
    for rule in rules:
        if rule.matches_type(package_type):
            resolved = rule.template.replace(NAME_PLACEHOLDER, package.name).rstrip("/")
            logger.debug("%s matched installer path %s -> %s", package, rule.template, resolved)
            return resolved
    return package.vendor_path()


def locate_package(
    project_root: Path,
    package: PackageIdentifier,
    rules: Sequence[InstallerPathRule],
    package_type: str,
) -> str:
    """Resolve the package directory and check that it exists."""
    resolved = resolve_package_path(package, rules, package_type)
    if not (project_root / resolved).is_dir():
        raise ResolutionError(resolved, package_type)
    return resolved
