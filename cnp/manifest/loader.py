"""Read and atomically rewrite package.json."""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Any, Iterable

from cnp.errors import ManifestError, WriteError
from cnp.models import DependencyKind, DependencyRecord, Manifest

logger = logging.getLogger(__name__)

_INDENT_RE = re.compile(r"^\{\s*?\n([ \t]+)\S", re.MULTILINE)


def load_manifest(path: Path) -> Manifest:
    """Parse a manifest, keeping key order, indentation and trailing newline."""
    path = Path(path)
    try:
        # newline="" keeps CRLF so the rewrite can reproduce it
        with path.open(encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except FileNotFoundError:
        raise ManifestError(f"`{path}` not found.") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read `{path}`: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in `{path}`: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"`{path}` must contain a JSON object.")

    if not any(kind.value in data for kind in DependencyKind):
        raise ManifestError(
            f"`{path}` declares neither `dependencies` nor `devDependencies`."
        )

    for kind in DependencyKind:
        section = data.get(kind.value)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ManifestError(f"`{kind.value}` in `{path}` must be an object.")
        for name, version in section.items():
            if not isinstance(version, str):
                raise ManifestError(
                    f"Version of `{name}` in `{kind.value}` must be a string."
                )

    manifest = Manifest(
        path=path,
        data=data,
        indent=_detect_indent(text),
        trailing_newline=text.endswith("\n"),
        newline="\r\n" if "\r\n" in text else "\n",
    )
    logger.debug("Loaded %d dependency record(s) from %s", len(manifest.records), path)
    return manifest


def load(path: Path) -> list[DependencyRecord]:
    """Return the dependency records declared in a manifest."""
    return load_manifest(path).records


def remove_dependencies(
    manifest: Manifest,
    names: Iterable[str],
) -> tuple[Manifest, dict[str, list[str]]]:
    """Return (new manifest, name -> sections it was removed from).

    Every other key keeps its value and position.
    """
    targets = set(names)
    sections = {kind.value for kind in DependencyKind}
    removed: dict[str, list[str]] = {}
    data: dict[str, Any] = {}

    for key, value in manifest.data.items():
        if key in sections and isinstance(value, dict):
            kept = {}
            for name, version in value.items():
                if name in targets:
                    removed.setdefault(name, []).append(key)
                else:
                    kept[name] = version
            data[key] = kept
        else:
            data[key] = value

    new_manifest = Manifest(
        path=manifest.path,
        data=data,
        indent=manifest.indent,
        trailing_newline=manifest.trailing_newline,
        newline=manifest.newline,
    )
    return new_manifest, removed


def dumps(manifest: Manifest) -> str:
    text = json.dumps(manifest.data, indent=manifest.indent, ensure_ascii=False)
    if manifest.trailing_newline:
        text += "\n"
    return text


def write_manifest(manifest: Manifest, path: Path | None = None) -> Path:
    """Write the manifest atomically; the original survives any failure."""
    target = Path(path or manifest.path)
    content = dumps(manifest)

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline=manifest.newline,
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(f"Failed to write `{target}`: {e}") from e

    logger.debug("Wrote %s", target)
    return target


def _detect_indent(text: str) -> str:
    m = _INDENT_RE.search(text)
    if not m:
        return "  "
    return m.group(1)
