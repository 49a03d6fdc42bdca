"""Scan orchestrator: manifest -> ignore set -> discover -> extract -> aggregate."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from cnp.analysis import aggregate, collect_imported, undeclared_imports
from cnp.errors import FileReadError
from cnp.extractor import extract_file
from cnp.ignore import load_ignore_set
from cnp.manifest import detect_package_manager, load_manifest
from cnp.models import ScanConfig, ScanResult, SkippedFile, SourceFile
from cnp.scanner import discover

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def run_scan(config: ScanConfig, progress: ProgressCallback | None = None) -> ScanResult:
    """Scan the project and classify every declared dependency.

    Raises ManifestError or ScanError; unreadable source files are skipped
    and reported in the result.
    """
    manifest = load_manifest(config.manifest_path)
    ignore_set = load_ignore_set(config.ignore_file)

    if progress:
        progress("Discovering", 0, 1)
    files = list(discover(config.project_dir, config.excluded_dirs, config.extensions))
    if progress:
        progress("Discovering", 1, 1)
    logger.debug("Discovered %d source file(s) under %s", len(files), config.project_dir)

    extractions, skipped = extract_all(files, config.max_workers, progress)

    records = manifest.records
    verdict = aggregate(records, ignore_set, extractions)

    return ScanResult(
        config=config,
        manifest=manifest,
        verdict=verdict,
        package_manager=detect_package_manager(config.project_dir),
        files_scanned=len(files) - len(skipped),
        skipped=skipped,
        undeclared=undeclared_imports(records, collect_imported(extractions)),
    )


def extract_all(
    files: list[SourceFile],
    max_workers: int,
    progress: ProgressCallback | None = None,
) -> tuple[list[set[str]], list[SkippedFile]]:
    """Extract every file in a thread pool; read failures are skipped."""
    extractions: list[set[str]] = []
    skipped: list[SkippedFile] = []
    total = len(files)

    if progress:
        progress("Scanning", 0, total)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {pool.submit(extract_file, f): f for f in files}
        for done, future in enumerate(as_completed(futures), start=1):
            source_file = futures[future]
            try:
                packages = future.result()
            except FileReadError as e:
                logger.warning("Skipping %s: %s", e.path, e.reason)
                skipped.append(SkippedFile(path=source_file.path, reason=e.reason))
            else:
                logger.debug("%s: %s", source_file.path, ", ".join(sorted(packages)) or "-")
                extractions.append(packages)
            if progress:
                progress("Scanning", done, total)

    skipped.sort(key=lambda s: str(s.path))
    return extractions, skipped
