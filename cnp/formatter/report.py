"""Render scan results and removal plans for the terminal or as JSON."""

from __future__ import annotations

import json
from typing import Sequence

import click

from cnp.models import CleanResult, DependencyRecord, ScanResult

_STATUS_COLORS = {"used": "green", "unused": "red", "ignored": "blue"}


def format_report(result: ScanResult) -> str:
    config = result.config
    verdict = result.verdict

    lines = [click.style("Dependency Usage Report", fg="blue", bold=True)]
    summary = [
        ("Project", str(config.manifest_path)),
        ("Package manager", result.package_manager),
        ("Extensions", ", ".join(config.extensions)),
        ("Excluded folders", ", ".join(config.excluded_dirs) or "-"),
        ("Explored files", str(result.files_scanned)),
        ("Skipped files", str(len(result.skipped))),
        ("Total dependencies", str(len(verdict))),
        ("Used dependencies", str(len(verdict.used) - len(verdict.ignored))),
        ("Ignored dependencies", str(len(verdict.ignored))),
        ("Unused dependencies", str(len(verdict.unused))),
    ]
    for metric, value in summary:
        lines.append(f"  {metric + ':':<22}{value}")
    lines.append("")

    records_by_name: dict[str, list[DependencyRecord]] = {}
    for record in result.manifest.records:
        records_by_name.setdefault(record.name, []).append(record)

    if not records_by_name:
        lines.append("No dependencies declared.")
    else:
        width = max(len(name) for name in records_by_name)
        for name in verdict:
            records = records_by_name[name]
            status = verdict.label(name)
            kinds = ", ".join(r.kind.label for r in records)
            versions = " | ".join(dict.fromkeys(r.version_range for r in records))
            lines.append(
                f"  {name:<{width}}  {kinds:<9}  {versions:<12}  "
                f"{click.style(status, fg=_STATUS_COLORS[status])}"
            )

    lines.append("")
    if verdict.unused:
        lines.append(click.style(f"{len(verdict.unused)} unused dependencies found.", fg="red", bold=True))
        lines.append(click.style(
            "Note: some may still be required at runtime (e.g. react-dom, CLI tools, "
            "type packages). Add them to .cnpignore to keep them.",
            fg="yellow",
        ))
    else:
        lines.append(click.style("No unused dependencies found!", fg="green", bold=True))
    return "\n".join(lines)


def format_plan(plan: Sequence[str], dry_run: bool) -> str:
    if not plan:
        return click.style("Nothing to remove.", fg="green")
    heading = "Dry-run mode: no changes will be made. Would remove:" if dry_run else "Will remove:"
    lines = [click.style(heading, fg="yellow", bold=True)]
    lines.extend(f"- {click.style(name, fg='yellow')}" for name in plan)
    return "\n".join(lines)


def format_clean_result(result: CleanResult, package_manager: str) -> str:
    if not result.removed:
        return click.style("No dependencies selected for removal.", fg="yellow", bold=True)
    lines = [click.style(f"Removed from {result.manifest_path}:", fg="green", bold=True)]
    for name in result.removed:
        lines.append(f"- {name} ({', '.join(result.sections[name])})")
    lines.append(f"Run `{package_manager} install` to update node_modules and the lockfile.")
    return "\n".join(lines)


def format_json(result: ScanResult, plan: Sequence[str] | None = None) -> str:
    verdict = result.verdict
    doc = {
        "manifest": str(result.config.manifest_path),
        "package_manager": result.package_manager,
        "files_scanned": result.files_scanned,
        "skipped_files": [{"path": str(s.path), "reason": s.reason} for s in result.skipped],
        "dependencies": [
            {
                "name": r.name,
                "kind": r.kind.value,
                "version": r.version_range,
                "used": verdict[r.name],
                "status": verdict.label(r.name),
            }
            for r in result.manifest.records
        ],
        "unused": verdict.unused,
        "undeclared_imports": result.undeclared,
    }
    if plan is not None:
        doc["removal_plan"] = list(plan)
    return json.dumps(doc, indent=2)
