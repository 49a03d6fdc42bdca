"""Fold per-file import sets into a used/unused verdict."""

from __future__ import annotations

from typing import AbstractSet, Iterable

from cnp.models import DependencyRecord, UsageVerdict


def collect_imported(per_file_extractions: Iterable[AbstractSet[str]]) -> set[str]:
    imported: set[str] = set()
    for packages in per_file_extractions:
        imported |= packages
    return imported


def aggregate(
    dependencies: Iterable[DependencyRecord],
    ignore_set: AbstractSet[str],
    per_file_extractions: Iterable[AbstractSet[str]],
) -> UsageVerdict:
    """Classify every declared dependency.

    A dependency is used when any file imports exactly its name, or when it
    is ignored. A name declared in both dependency sections gets one entry,
    at its first declaration.
    """
    imported = collect_imported(per_file_extractions)
    status: dict[str, bool] = {}
    for record in dependencies:
        if record.name not in status:
            status[record.name] = record.name in ignore_set or record.name in imported
    ignored = frozenset(name for name in status if name in ignore_set)
    return UsageVerdict(status=status, ignored=ignored)


def undeclared_imports(
    dependencies: Iterable[DependencyRecord],
    imported: AbstractSet[str],
) -> list[str]:
    """Imported package names that the manifest does not declare."""
    declared = {record.name for record in dependencies}
    return sorted(imported - declared)
