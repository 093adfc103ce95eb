#!/usr/bin/env python3

from typing import NamedTuple

from vendorpatch.errors import InputError


class PackageIdentifier(NamedTuple):
    """A Composer package name split into vendor namespace and package name."""

    namespace: str
    name: str

    @classmethod
    def parse(cls, value: str) -> "PackageIdentifier":
        """Parse ``namespace/name``; anything else raises InputError."""
        if value is None:
            raise InputError("Vendor package is required")
        parts = value.strip().split("/")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise InputError(
                f"Invalid package identifier {value!r}: expected <vendor>/<package>"
            )
        return cls(parts[0], parts[1])

    def vendor_path(self) -> str:
        """Default Composer install location relative to the project root."""
        return f"vendor/{self.namespace}/{self.name}"

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"
