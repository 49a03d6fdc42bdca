"""Tests for manifest loading, rewriting and package manager detection."""

import json
import logging
import os
import subprocess

import pytest

from cnp.errors import ManifestError, WriteError
from cnp.manifest import (
    detect_package_manager,
    load,
    load_manifest,
    reinstall,
    remove_dependencies,
    write_manifest,
)
from cnp.models import DependencyKind, DependencyRecord


class TestLoad:
    def test_records_in_declaration_order(self, sample_project):
        records = load(sample_project / "package.json")
        assert records[0] == DependencyRecord("react", "^18.2.0", DependencyKind.RUNTIME)
        assert [r.name for r in records if r.kind is DependencyKind.DEVELOPMENT] == [
            "eslint", "typescript", "jest", "@types/node",
        ]
        assert len(records) == 10

    def test_empty_sections_are_valid(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "x", "dependencies": {}}')
        assert load(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            load_manifest(tmp_path / "package.json")

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2]",
        '{"name": "no-deps"}',
        '{"dependencies": ["react"]}',
        '{"devDependencies": {"eslint": 8}}',
    ])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "package.json"
        path.write_text(content)
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_same_name_in_both_sections(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({
            "dependencies": {"typescript": "^5.0.0"},
            "devDependencies": {"typescript": "^5.3.0", "vite": "^5.0.0"},
        }))
        manifest = load_manifest(path)
        assert len(manifest.records) == 3
        assert manifest.dependency_names == ["typescript", "vite"]
        assert manifest.kinds_of("typescript") == [DependencyKind.RUNTIME, DependencyKind.DEVELOPMENT]


class TestRewrite:
    def test_remove_keeps_other_fields_and_order(self, sample_project):
        manifest = load_manifest(sample_project / "package.json")
        updated, removed = remove_dependencies(manifest, ["lodash", "eslint", "not-declared"])

        assert removed == {"lodash": ["dependencies"], "eslint": ["devDependencies"]}
        assert list(updated.data) == list(manifest.data)
        assert list(updated.data["dependencies"]) == [
            "react", "@vercel/analytics", "axios", "left-pad", "date-fns",
        ]
        assert updated.data["scripts"] == manifest.data["scripts"]
        # The input manifest is untouched.
        assert "lodash" in manifest.data["dependencies"]

    def test_remove_from_both_sections(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({
            "dependencies": {"typescript": "^5.0.0"},
            "devDependencies": {"typescript": "^5.3.0"},
        }))
        updated, removed = remove_dependencies(load_manifest(path), ["typescript"])
        assert removed == {"typescript": ["dependencies", "devDependencies"]}
        assert updated.data == {"dependencies": {}, "devDependencies": {}}

    def test_write_preserves_formatting(self, sample_project):
        path = sample_project / "package.json"
        original = path.read_text()
        manifest = load_manifest(path)
        write_manifest(manifest)
        assert path.read_text() == original

    def test_write_preserves_tab_indent_and_missing_newline(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{\n\t"name": "tabs",\n\t"dependencies": {\n\t\t"a": "1"\n\t}\n}')
        manifest = load_manifest(path)
        assert manifest.indent == "\t"
        assert manifest.trailing_newline is False
        assert manifest.newline == "\n"
        updated, _ = remove_dependencies(manifest, ["a"])
        write_manifest(updated)
        assert path.read_text() == '{\n\t"name": "tabs",\n\t"dependencies": {}\n}'

    def test_write_preserves_crlf_line_endings(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_bytes(
            b'{\r\n  "name": "crlf",\r\n  "dependencies": {\r\n'
            b'    "a": "1",\r\n    "b": "2"\r\n  }\r\n}\r\n'
        )
        manifest = load_manifest(path)
        assert manifest.newline == "\r\n"
        assert manifest.indent == "  "
        updated, _ = remove_dependencies(manifest, ["a"])
        write_manifest(updated)
        assert path.read_bytes() == (
            b'{\r\n  "name": "crlf",\r\n  "dependencies": {\r\n    "b": "2"\r\n  }\r\n}\r\n'
        )

    def test_write_keeps_non_ascii(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{\n  "description": "Café ☕",\n  "dependencies": {}\n}\n', encoding="utf-8")
        write_manifest(load_manifest(path))
        assert "Café ☕" in path.read_text(encoding="utf-8")

    def test_failed_write_leaves_original(self, sample_project, monkeypatch):
        path = sample_project / "package.json"
        original = path.read_text()
        updated, _ = remove_dependencies(load_manifest(path), ["lodash"])

        def broken_replace(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("cnp.manifest.loader.os.replace", broken_replace)
        with pytest.raises(WriteError):
            write_manifest(updated)

        assert path.read_text() == original
        leftovers = [p.name for p in sample_project.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_write_error_is_a_manifest_error(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"dependencies": {}}')
        manifest = load_manifest(path)
        with pytest.raises(ManifestError):
            write_manifest(manifest, tmp_path / "missing-dir" / "package.json")
        assert os.listdir(tmp_path) == ["package.json"]


class TestPackageManager:
    def test_default_is_npm(self, tmp_path):
        assert detect_package_manager(tmp_path) == "npm"

    @pytest.mark.parametrize("lockfile,expected", [
        ("pnpm-lock.yaml", "pnpm"),
        ("yarn.lock", "yarn"),
        ("bun.lock", "bun"),
        ("bun.lockb", "bun"),
        ("package-lock.json", "npm"),
    ])
    def test_lockfiles(self, tmp_path, lockfile, expected):
        (tmp_path / lockfile).write_text("")
        assert detect_package_manager(tmp_path) == expected

    def test_multiple_lockfiles_warn(self, tmp_path, caplog):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "package-lock.json").write_text("{}")
        with caplog.at_level(logging.WARNING, logger="cnp"):
            assert detect_package_manager(tmp_path) == "yarn"
        assert "Multiple lockfiles" in caplog.text

    def test_reinstall_runs_install(self, tmp_path, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs["cwd"]))
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("cnp.manifest.package_manager.subprocess.run", fake_run)
        assert reinstall("pnpm", tmp_path) is True
        assert calls == [(["pnpm", "install"], tmp_path)]

    def test_reinstall_failure_warns(self, tmp_path, monkeypatch, caplog):
        def missing_binary(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        monkeypatch.setattr("cnp.manifest.package_manager.subprocess.run", missing_binary)
        with caplog.at_level(logging.WARNING, logger="cnp"):
            assert reinstall("bun", tmp_path) is False
        assert "Could not run bun install" in caplog.text
