"""Shared fixtures."""

import json
import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_project(tmp_path):
    """A writable copy of fixtures/sample_project with build output and node_modules."""
    project = tmp_path / "sample_project"
    shutil.copytree(FIXTURES / "sample_project", project)

    # Excluded directories: anything they import must never count.
    lodash = project / "node_modules" / "lodash"
    lodash.mkdir(parents=True)
    (lodash / "index.js").write_text("module.exports = require('lodash/fp');\n")
    (lodash / "package.json").write_text(json.dumps({"name": "lodash"}))
    dist = project / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text("var pad = require(\"left-pad\");\nimport 'eslint';\n")
    return project


@pytest.fixture
def write_project(tmp_path):
    """Build a small project from a manifest dict and {relative path: source}."""

    def _write(dependencies=None, dev_dependencies=None, files=None, ignore=None):
        manifest = {"name": "fixture", "version": "1.0.0"}
        if dependencies is not None:
            manifest["dependencies"] = dependencies
        if dev_dependencies is not None:
            manifest["devDependencies"] = dev_dependencies
        (tmp_path / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
        for rel, source in (files or {}).items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)
        if ignore is not None:
            (tmp_path / ".cnpignore").write_text(ignore)
        return tmp_path

    return _write
