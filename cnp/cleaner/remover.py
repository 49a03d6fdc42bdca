"""Apply a finalized removal plan to the manifest."""

from __future__ import annotations

import logging

from cnp.manifest.loader import remove_dependencies, write_manifest
from cnp.models import CleanResult, Manifest

logger = logging.getLogger(__name__)


def clean(manifest: Manifest, plan: list[str], dry_run: bool = False) -> CleanResult:
    """Remove the planned names from every section they appear in.

    The manifest is written once, and only for a non-empty plan outside
    dry-run mode.
    """
    updated, sections = remove_dependencies(manifest, plan)
    result = CleanResult(
        manifest_path=manifest.path,
        removed=[name for name in plan if name in sections],
        sections=sections,
        dry_run=dry_run,
    )

    if dry_run or not result.removed:
        return result

    write_manifest(updated)
    result.written = True
    logger.debug("Removed %d unused dependencies from %s", len(result.removed), manifest.path)
    return result
