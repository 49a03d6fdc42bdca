"""Exceptions raised by cnp."""

from __future__ import annotations

from pathlib import Path


class CnpError(Exception):
    """Base class for every error cnp reports to the user."""


class ManifestError(CnpError):
    """package.json is missing, malformed or cannot be written."""


class WriteError(ManifestError):
    """The rewritten manifest could not be persisted."""


class ScanError(CnpError):
    """The project root cannot be walked."""


class IgnoreFileError(CnpError):
    """The exclusion file exists but cannot be read."""


class FileReadError(CnpError):
    """A single source file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
