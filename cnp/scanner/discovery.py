"""Walk a project tree and yield JS/TS source files."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from cnp.errors import ScanError
from cnp.models import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS, SourceFile

logger = logging.getLogger(__name__)


def discover(
    root: Path,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> Iterator[SourceFile]:
    """Yield source files under root, in sorted order.

    Excluded directories are pruned before os.walk descends into them, so
    node_modules is never listed. Directory symlinks are not followed.
    """
    root = Path(root)
    _check_root(root)

    patterns = tuple(excluded_dirs)
    wanted = {ext.lower().lstrip(".") for ext in extensions}

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames[:] = sorted(d for d in dirnames if not is_excluded(d, patterns))
        for filename in sorted(filenames):
            _, dot, ext = filename.rpartition(".")
            if not dot or ext.lower() not in wanted:
                continue
            path = Path(dirpath) / filename
            if not path.is_file():
                continue
            yield SourceFile(path=path, extension=ext.lower())


def is_excluded(dirname: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatchcase(dirname, pattern) for pattern in patterns)


def _check_root(root: Path) -> None:
    if not root.is_dir():
        raise ScanError(f"Project root `{root}` is not a directory.")
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise ScanError(f"Cannot read project root `{root}`: {e}") from e


def _on_walk_error(error: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)
