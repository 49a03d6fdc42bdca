"""Load the .cnpignore exclusion list."""

from __future__ import annotations

import logging
from pathlib import Path

from cnp.errors import IgnoreFileError

logger = logging.getLogger(__name__)


def parse_ignore_lines(text: str) -> frozenset[str]:
    names = set()
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.add(line)
    return frozenset(names)


def read_ignore_file(path: Path) -> frozenset[str]:
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileError(f"Cannot read ignore file `{path}`: {e}") from e
    return parse_ignore_lines(text)


def load_ignore_set(path: Path | None) -> frozenset[str]:
    """Return the ignored dependency names; a missing file means none."""
    if path is None or not Path(path).exists():
        return frozenset()
    try:
        names = read_ignore_file(path)
    except IgnoreFileError as e:
        logger.warning("%s; continuing without exclusions", e)
        return frozenset()
    logger.debug("Ignoring %d dependency name(s) from %s", len(names), path)
    return names
