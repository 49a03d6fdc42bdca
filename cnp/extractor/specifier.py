"""Reduce an import specifier to the npm package it names."""

from __future__ import annotations

import re

from cnp.models import ImportReference

# node:fs, virtual:pwa-register, https://esm.sh/react, data:...
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Relative/absolute paths, package-internal #imports and ~/ aliases.
_LOCAL_PREFIXES = (".", "/", "#", "~")


def package_name(specifier: str) -> str | None:
    """Return the package a specifier resolves to, or None for local ones.

    >>> package_name("@scope/name/sub/path")
    '@scope/name'
    >>> package_name("lodash/fp")
    'lodash'
    """
    spec = specifier.strip()
    if not spec or spec.startswith(_LOCAL_PREFIXES) or _SCHEME_RE.match(spec):
        return None

    parts = spec.split("/")
    if spec.startswith("@"):
        if len(parts) < 2 or parts[0] == "@" or not parts[1]:
            return None
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def parse_reference(specifier: str) -> ImportReference:
    return ImportReference(raw_specifier=specifier, package_name=package_name(specifier))
