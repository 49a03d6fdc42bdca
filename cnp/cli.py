"""Click CLI with scan and clean subcommands."""

from __future__ import annotations

from pathlib import Path

import click

from cnp import __version__
from cnp.cleaner import accept_all, apply_decisions, clean, plan_removal
from cnp.errors import CnpError
from cnp.formatter import format_clean_result, format_json, format_plan, format_report
from cnp.logging import configure_logging
from cnp.manifest import reinstall
from cnp.models import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS, CleanMode, ScanConfig
from cnp.pipeline import run_scan


_SCAN_OPTIONS = (
    click.argument(
        "project_dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=".",
    ),
    click.option("--manifest", "manifest_path", type=click.Path(dir_okay=False, path_type=Path),
                 help="Path to package.json (default: PROJECT_DIR/package.json)"),
    click.option("--ignore-file", type=click.Path(dir_okay=False, path_type=Path),
                 help="Exclusion list (default: PROJECT_DIR/.cnpignore)"),
    click.option("--exclude", "-e", multiple=True, help="Extra directory name or glob to skip"),
    click.option("--no-default-excludes", is_flag=True, help="Do not skip node_modules, dist, build, ..."),
    click.option("--workers", type=click.IntRange(min=1), help="Number of reader threads"),
    click.option("--json", "as_json", is_flag=True, help="Print the report as JSON"),
    click.option("--verbose", "-v", is_flag=True, help="Show debug logging"),
)


def _scan_options(func):
    for decorator in reversed(_SCAN_OPTIONS):
        func = decorator(func)
    return func


def _build_config(
    project_dir: Path,
    manifest_path: Path | None,
    ignore_file: Path | None,
    exclude: tuple[str, ...],
    no_default_excludes: bool,
    workers: int | None,
) -> ScanConfig:
    base = () if no_default_excludes else DEFAULT_EXCLUDED_DIRS
    return ScanConfig(
        project_dir=project_dir,
        manifest_path=manifest_path,
        ignore_file=ignore_file,
        excluded_dirs=tuple(dict.fromkeys(base + exclude)),
        extensions=DEFAULT_EXTENSIONS,
        workers=workers,
    )


def _progress(stage: str, current: int, total: int) -> None:
    if total > 0:
        click.echo(f"\r  {stage}: {current}/{total}", nl=(current == total), err=True)


def _scan(config: ScanConfig, show_progress: bool):
    try:
        return run_scan(config, progress=_progress if show_progress else None)
    except CnpError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__)
def cli():
    """cnp: check node packages for unused dependencies."""


@cli.command()
@_scan_options
def scan(project_dir, manifest_path, ignore_file, exclude, no_default_excludes, workers, as_json, verbose):
    """Report which declared dependencies are used by the source code."""
    configure_logging(verbose=verbose)
    config = _build_config(project_dir, manifest_path, ignore_file, exclude, no_default_excludes, workers)
    result = _scan(config, show_progress=verbose and not as_json)

    if as_json:
        click.echo(format_json(result))
    else:
        click.echo(format_report(result))


@cli.command("clean")
@_scan_options
@click.option("--dry-run", is_flag=True, help="Show what would be removed without changing anything")
@click.option("--interactive", "-i", is_flag=True, help="Confirm each dependency separately")
@click.option("--yes", "-y", is_flag=True, help="Remove every unused dependency without asking")
@click.option("--reinstall", "run_reinstall", is_flag=True, help="Run '<package manager> install' afterwards")
def clean_command(
    project_dir, manifest_path, ignore_file, exclude, no_default_excludes, workers, as_json, verbose,
    dry_run, interactive, yes, run_reinstall,
):
    """Remove unused dependencies from package.json."""
    if interactive and yes:
        raise click.UsageError("--interactive and --yes cannot be combined")
    if as_json and not dry_run:
        raise click.UsageError("--json is only supported with --dry-run")

    configure_logging(verbose=verbose)
    config = _build_config(project_dir, manifest_path, ignore_file, exclude, no_default_excludes, workers)
    result = _scan(config, show_progress=verbose and not as_json)
    plan = plan_removal(result.verdict)

    if dry_run:
        mode = CleanMode.DRY_RUN
    elif interactive:
        mode = CleanMode.INTERACTIVE
    elif yes:
        mode = CleanMode.AUTO
    else:
        mode = CleanMode.CONFIRM

    if as_json:
        click.echo(format_json(result, plan=plan))
        return

    click.echo(format_report(result))
    click.echo()
    click.echo(format_plan(plan, dry_run=mode is CleanMode.DRY_RUN))
    if mode is CleanMode.DRY_RUN or not plan:
        return

    click.echo(f"Manifest: {result.manifest.path}")
    decisions = _collect_decisions(plan, mode)
    final_plan = apply_decisions(plan, decisions)

    try:
        outcome = clean(result.manifest, final_plan)
    except CnpError as e:
        raise click.ClickException(str(e))

    click.echo()
    click.echo(format_clean_result(outcome, result.package_manager))

    if run_reinstall and outcome.written:
        click.echo(f"Running {result.package_manager} install...")
        if reinstall(result.package_manager, config.project_dir):
            click.echo(click.style("Reinstallation successful!", fg="green"))
        else:
            click.echo(click.style("Reinstallation failed; see the warning above.", fg="red"))


def _collect_decisions(plan: list[str], mode: CleanMode) -> dict[str, bool]:
    if mode is CleanMode.AUTO:
        return accept_all(plan)
    if mode is CleanMode.INTERACTIVE:
        return {name: click.confirm(f"Remove {name}?", default=False) for name in plan}
    confirmed = click.confirm(f"Remove all {len(plan)} unused dependencies?", default=False)
    return accept_all(plan, confirmed)


def main() -> None:
    cli(auto_envvar_prefix="CNP")


if __name__ == "__main__":
    main()
