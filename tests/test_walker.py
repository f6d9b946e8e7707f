"""Tests for file discovery and reading."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from coderef.walker import default_dir_filter, read_lines, read_text, walk_files


def _create_project(tmp_path, files: dict) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    for rel_path, content in files.items():
        file_path = project_dir / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    return project_dir


def _names(paths, root):
    return sorted(str(p.relative_to(root)).replace(os.sep, "/") for p in paths)


class TestWalkFiles:
    """Test directory traversal."""

    def test_finds_source_files(self, tmp_path):
        project = _create_project(tmp_path, {
            "src/app.ts": "",
            "src/util/helpers.py": "",
            "README.txt": "",
            "image.png": "",
        })
        assert _names(walk_files(project), project) == ["src/app.ts", "src/util/helpers.py"]

    def test_excluded_directories(self, tmp_path):
        project = _create_project(tmp_path, {
            "src/app.ts": "",
            "node_modules/lib/index.js": "",
            ".git/hooks/pre-commit.sh": "",
            "dist/bundle.js": "",
            "__pycache__/x.py": "",
            "coverage/report.js": "",
        })
        assert _names(walk_files(project), project) == ["src/app.ts"]

    def test_custom_filters(self, tmp_path):
        project = _create_project(tmp_path, {"a/x.txt": "", "b/y.txt": "", "z.md": ""})
        found = walk_files(
            project,
            dir_filter=lambda p: p.name != "b",
            file_filter=lambda p: p.suffix == ".txt",
        )
        assert _names(found, project) == ["a/x.txt"]

    def test_oversized_file_skipped(self, tmp_path):
        project = _create_project(tmp_path, {"small.ts": "const a = 1\n"})
        (project / "big.ts").write_bytes(b"x" * (6 * 1024 * 1024))
        assert _names(walk_files(project), project) == ["small.ts"]

    def test_size_cap_disabled(self, tmp_path):
        project = _create_project(tmp_path, {"small.ts": ""})
        (project / "big.ts").write_bytes(b"x" * 2048)
        assert _names(walk_files(project, max_size=None), project) == ["big.ts", "small.ts"]
        assert _names(walk_files(project, max_size=1024), project) == ["small.ts"]

    def test_file_root(self, tmp_path):
        project = _create_project(tmp_path, {"app.ts": ""})
        assert list(walk_files(project / "app.ts")) == [project / "app.ts"]

    def test_missing_root_yields_nothing(self, tmp_path):
        assert list(walk_files(tmp_path / "nope")) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinked_directories_not_followed(self, tmp_path):
        project = _create_project(tmp_path, {"src/app.ts": ""})
        try:
            os.symlink(project / "src", project / "loop", target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks")
        assert _names(walk_files(project), project) == ["src/app.ts"]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="permissions not enforced")
    def test_unreadable_directory_skipped(self, tmp_path):
        project = _create_project(tmp_path, {"ok/a.ts": "", "locked/b.ts": ""})
        (project / "locked").chmod(0)
        try:
            assert _names(walk_files(project), project) == ["ok/a.ts"]
        finally:
            (project / "locked").chmod(0o755)


class TestDefaultDirFilter:
    def test_filter(self):
        assert default_dir_filter(Path("src"))
        assert not default_dir_filter(Path("node_modules"))
        assert not default_dir_filter(Path("a/.git"))


class TestReadText:
    """Test reading with caps and decode errors."""

    def test_reads_text(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("one\ntwo\n")
        assert read_text(path) == "one\ntwo\n"
        assert read_lines(path) == ["one", "two"]

    def test_oversized(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text("x" * 100)
        assert read_text(path, max_size=10) is None

    def test_binary_content(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_bytes(b"\xff\xfe\x00\x80")
        assert read_text(path) is None
        assert read_lines(path) is None

    def test_missing(self, tmp_path):
        assert read_text(tmp_path / "missing.ts") is None
