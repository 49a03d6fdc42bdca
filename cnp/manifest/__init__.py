"""Manifest layer."""

from cnp.manifest.loader import (
    load,
    load_manifest,
    remove_dependencies,
    write_manifest,
)
from cnp.manifest.package_manager import detect_package_manager, reinstall

__all__ = [
    "detect_package_manager",
    "load",
    "load_manifest",
    "reinstall",
    "remove_dependencies",
    "write_manifest",
]
