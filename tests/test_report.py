"""Tests for the terminal report."""

import click

from cnp.formatter import format_report
from cnp.models import ScanConfig
from cnp.pipeline import run_scan


def _dependency_rows(text):
    # Summary lines are "Metric: value"; dependency rows carry no colon.
    return [line.split() for line in text.splitlines() if line.startswith("  ") and ":" not in line]


def test_report_lists_each_dependency_once(sample_project):
    result = run_scan(ScanConfig(project_dir=sample_project))
    text = click.unstyle(format_report(result))

    rows = _dependency_rows(text)
    assert [row[0] for row in rows] == result.manifest.dependency_names
    status = {row[0]: row[-1] for row in rows}
    assert status["lodash"] == "unused"
    assert status["react"] == "used"
    assert status["@types/node"] == "ignored"
    assert "Explored files:" in text
    assert "3 unused dependencies found." in text


def test_report_merges_both_sections(write_project):
    project = write_project(
        dependencies={"typescript": "^5.0.0"},
        dev_dependencies={"typescript": "^5.3.0", "vite": "^5.0.0"},
        files={"src/main.ts": "import ts from 'typescript';\n"},
    )
    text = click.unstyle(format_report(run_scan(ScanConfig(project_dir=project))))

    lines = [line for line in text.splitlines() if line.strip().startswith("typescript")]
    assert len(lines) == 1
    assert "prod, dev" in lines[0]
    assert "^5.0.0 | ^5.3.0" in lines[0]
    assert "vite" in text and "1 unused dependencies found." in text


def test_report_without_dependencies(write_project):
    project = write_project(dependencies={})
    text = click.unstyle(format_report(run_scan(ScanConfig(project_dir=project))))
    assert "No dependencies declared." in text
    assert "No unused dependencies found!" in text
