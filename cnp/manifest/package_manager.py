"""Guess the package manager from the lockfiles next to the manifest."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# Checked in order; the first lockfile found decides.
LOCKFILES: tuple[tuple[str, str], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lock", "bun"),
    ("bun.lockb", "bun"),
    ("package-lock.json", "npm"),
)


def detect_package_manager(project_dir: Path) -> str:
    found = [(name, pm) for name, pm in LOCKFILES if (Path(project_dir) / name).exists()]
    if not found:
        return "npm"
    if len({pm for _, pm in found}) > 1:
        logger.warning(
            "Multiple lockfiles detected (%s). Please use only one package manager.",
            ", ".join(name for name, _ in found),
        )
    return found[0][1]


def reinstall(package_manager: str, project_dir: Path) -> bool:
    """Run `<package_manager> install` so node_modules matches the manifest."""
    try:
        proc = subprocess.run(
            [package_manager, "install"],
            cwd=project_dir,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.warning("Could not run %s install: %s", package_manager, e)
        return False

    if proc.returncode != 0:
        logger.warning(
            "%s install exited with status %d: %s",
            package_manager, proc.returncode, proc.stderr.strip()[-500:],
        )
        return False
    return True
