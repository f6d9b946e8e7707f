"""Tests for file name and file content search."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from coderef.errors import InvalidParamsError
from coderef.file_search import search_file_content, search_files


def _create_project(tmp_path, files: dict) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    for rel_path, content in files.items():
        file_path = project_dir / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content, encoding="utf-8")
    return project_dir


# ===========================================================================
# search_files
# ===========================================================================

class TestSearchFiles:
    def test_finds_by_name_fragment(self, tmp_path):
        project = _create_project(tmp_path, {
            "src/user.ts": "",
            "src/user_test.py": "",
            "docs/users.md": "",
            "src/app.ts": "",
        })
        text = search_files({"query": "user"}, cwd=str(project))
        assert "**File search results for \"user\"**" in text
        assert "Found 3 files:" in text
        assert f"- `{os.path.join('src', 'user.ts')}`" in text
        assert "app.ts" not in text

    def test_any_file_type(self, tmp_path):
        project = _create_project(tmp_path, {"assets/logo.png": b"\x89PNG"})
        text = search_files({"query": "logo"}, cwd=str(project))
        assert "Found 1 files:" in text

    def test_excluded_dirs_skipped(self, tmp_path):
        project = _create_project(tmp_path, {"node_modules/user/index.js": ""})
        text = search_files({"query": "index"}, cwd=str(project))
        assert "**No files found for \"index\"**" in text

    def test_base_path(self, tmp_path):
        project = _create_project(tmp_path, {"a/user.ts": "", "b/user.ts": ""})
        text = search_files({"query": "user", "basePath": "b"}, cwd=str(project))
        assert "Found 1 files:" in text
        assert os.path.join("b", "user.ts") in text

    def test_path_not_found(self, tmp_path):
        project = _create_project(tmp_path, {})
        text = search_files({"query": "user", "basePath": "nope"}, cwd=str(project))
        assert "**Path not found**" in text
        assert "\"nope\"" in text

    @pytest.mark.parametrize("params", [{}, {"query": ""}, {"query": 3}, None])
    def test_missing_query(self, params):
        with pytest.raises(InvalidParamsError) as exc:
            search_files(params)
        assert exc.value.message == "Missing required parameter: query"


# ===========================================================================
# search_file_content
# ===========================================================================

class TestSearchFileContent:
    def test_groups_lines_by_file(self, tmp_path):
        project = _create_project(tmp_path, {
            "a.py": "x = 1\n    retry: 3\nretry later\n",
            "b.ts": "// retry once\n",
            "c.txt": "nothing here\n",
        })
        text = search_file_content({"keyword": "retry"}, cwd=str(project))
        assert "**Content search results for \"retry\"**" in text
        assert "Found keyword in 2 files:" in text
        assert "**File:** `a.py`" in text
        assert "```python\n2: retry: 3\n3: retry later\n```" in text
        assert "```typescript\n1: // retry once\n```" in text

    def test_case_sensitive(self, tmp_path):
        project = _create_project(tmp_path, {"a.py": "RETRY\n"})
        text = search_file_content({"keyword": "retry"}, cwd=str(project))
        assert "**No content matches for \"retry\"**" in text

    def test_plain_text_files_searched(self, tmp_path):
        project = _create_project(tmp_path, {"notes.txt": "deploy on friday\n"})
        text = search_file_content({"keyword": "friday"}, cwd=str(project))
        assert "**File:** `notes.txt`" in text
        assert "```\n1: deploy on friday\n```" in text

    def test_binary_extensions_skipped(self, tmp_path):
        project = _create_project(tmp_path, {"logo.png": b"retry"})
        text = search_file_content({"keyword": "retry"}, cwd=str(project))
        assert "No content matches" in text

    def test_large_files_skipped(self, tmp_path):
        project = _create_project(tmp_path, {"big.log": b"retry\n" * 600_000})
        text = search_file_content({"keyword": "retry"}, cwd=str(project))
        assert "No content matches" in text

    def test_path_not_found(self, tmp_path):
        text = search_file_content({"keyword": "x", "basePath": "nope"}, cwd=str(tmp_path))
        assert "**Path not found**" in text

    def test_missing_keyword(self):
        with pytest.raises(InvalidParamsError):
            search_file_content({"basePath": "."})
