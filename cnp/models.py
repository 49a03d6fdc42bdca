"""Data models for the cnp scan and clean pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "jsx", "ts", "tsx")

DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    "node_modules", "dist", "build", "out", "output", "coverage",
    ".next", ".nuxt", ".svelte-kit", ".turbo", ".cache", ".vercel",
    ".git", ".hg", ".svn",
)

MANIFEST_FILENAME = "package.json"
IGNORE_FILENAME = ".cnpignore"


class DependencyKind(enum.Enum):
    RUNTIME = "dependencies"
    DEVELOPMENT = "devDependencies"

    @property
    def label(self) -> str:
        return "dev" if self is DependencyKind.DEVELOPMENT else "prod"


class CleanMode(enum.Enum):
    DRY_RUN = "dry-run"
    INTERACTIVE = "interactive"
    CONFIRM = "confirm"
    AUTO = "auto"


@dataclass(frozen=True)
class DependencyRecord:
    """One declared dependency in one manifest section."""
    name: str
    version_range: str
    kind: DependencyKind


@dataclass(frozen=True)
class SourceFile:
    """A JS/TS file found under the project root."""
    path: Path
    extension: str  # without the leading dot


@dataclass(frozen=True)
class ImportReference:
    """One literal import/require specifier and the package it names."""
    raw_specifier: str
    package_name: str | None  # None for relative and non-package specifiers


@dataclass
class Manifest:
    """A parsed package.json plus what is needed to write it back unchanged."""
    path: Path
    data: dict[str, Any]
    indent: str = "  "
    trailing_newline: bool = True
    newline: str = "\n"  # "\r\n" for CRLF files

    @property
    def records(self) -> list[DependencyRecord]:
        records: list[DependencyRecord] = []
        for kind in DependencyKind:
            for name, version in (self.data.get(kind.value) or {}).items():
                records.append(DependencyRecord(name=name, version_range=version, kind=kind))
        return records

    @property
    def dependency_names(self) -> list[str]:
        """Declared names in declaration order, each name once."""
        return list(dict.fromkeys(r.name for r in self.records))

    def kinds_of(self, name: str) -> list[DependencyKind]:
        return [kind for kind in DependencyKind if name in (self.data.get(kind.value) or {})]


@dataclass
class UsageVerdict:
    """Used/unused status of every declared dependency, in declaration order."""
    status: dict[str, bool] = field(default_factory=dict)
    ignored: frozenset[str] = field(default_factory=frozenset)

    def __getitem__(self, name: str) -> bool:
        return self.status[name]

    def __contains__(self, name: object) -> bool:
        return name in self.status

    def __iter__(self) -> Iterator[str]:
        return iter(self.status)

    def __len__(self) -> int:
        return len(self.status)

    @property
    def used(self) -> list[str]:
        return [name for name, used in self.status.items() if used]

    @property
    def unused(self) -> list[str]:
        return [name for name, used in self.status.items() if not used]

    def label(self, name: str) -> str:
        if name in self.ignored:
            return "ignored"
        return "used" if self.status[name] else "unused"

    def as_dict(self) -> dict[str, bool]:
        return dict(self.status)


@dataclass
class ScanConfig:
    """Configuration for one scan (and optional clean) run."""
    project_dir: Path = field(default_factory=lambda: Path("."))
    manifest_path: Path | None = None
    ignore_file: Path | None = None
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    workers: int | None = None

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir)
        self.manifest_path = Path(self.manifest_path or self.project_dir / MANIFEST_FILENAME)
        self.ignore_file = Path(self.ignore_file or self.project_dir / IGNORE_FILENAME)

    @property
    def max_workers(self) -> int:
        if self.workers:
            return self.workers
        return min(32, (os.cpu_count() or 1) + 4)


@dataclass
class SkippedFile:
    path: Path
    reason: str


@dataclass
class ScanResult:
    """Result of the scan stage."""
    config: ScanConfig
    manifest: Manifest
    verdict: UsageVerdict
    package_manager: str = "npm"
    files_scanned: int = 0
    skipped: list[SkippedFile] = field(default_factory=list)
    undeclared: list[str] = field(default_factory=list)


@dataclass
class CleanResult:
    """Result of the clean stage."""
    manifest_path: Path
    removed: list[str] = field(default_factory=list)
    sections: dict[str, list[str]] = field(default_factory=dict)
    written: bool = False
    dry_run: bool = False
