"""
Tests for the list_files tool and the directory listing service.
"""

import json
import os

import pytest

from taskvalet.config import RuntimeSettings
from taskvalet.services import list_files
from taskvalet.task import Task
from taskvalet.tools import ListFilesParams, ListFilesTool
from taskvalet.tools.models import ToolUse


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("print('hi')\n")
    (tmp_path / "src" / "lib").mkdir()
    (tmp_path / "src" / "lib" / "util.py").write_text("")
    (tmp_path / "README.md").write_text("# readme\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("")
    return tmp_path


class TestListFilesService:
    """Tests for the listing helper"""

    def test_top_level(self, workspace):
        files, did_hit_limit = list_files(str(workspace), recursive=False, limit=200)

        assert did_hit_limit is False
        assert sorted(files) == sorted([
            str(workspace / "README.md"),
            str(workspace / "node_modules") + os.sep,
            str(workspace / "src") + os.sep,
        ])

    def test_recursive_skips_ignored_dirs(self, workspace):
        files, _ = list_files(str(workspace), recursive=True, limit=200)

        assert str(workspace / "src" / "lib" / "util.py") in files
        assert str(workspace / "node_modules" / "dep.js") not in files

    def test_limit(self, workspace):
        files, did_hit_limit = list_files(str(workspace), recursive=True, limit=2)

        assert len(files) == 2
        assert did_hit_limit is True


class TestListFilesTool:
    """Tests for the list_files tool"""

    def test_parse_legacy_recursive(self):
        tool = ListFilesTool()
        assert tool.parse_legacy({"path": "src", "recursive": "TRUE"}) == ListFilesParams("src", True)
        assert tool.parse_legacy({"path": "src", "recursive": "yes"}) == ListFilesParams("src", False)
        assert tool.parse_legacy({}) == ListFilesParams("", False)

    @pytest.mark.asyncio
    async def test_lists_directory(self, workspace, host, recorder):
        task = Task(host=host, cwd=str(workspace))

        await ListFilesTool().execute(ListFilesParams(path="src", recursive=True), task, recorder.build())

        assert recorder.results == ["app.py\nlib/\nlib/util.py"]
        payload = json.loads(recorder.approvals[0][1])
        assert payload["tool"] == "listFilesRecursive"
        assert payload["path"] == "src"
        assert payload["isOutsideWorkspace"] is False

    @pytest.mark.asyncio
    async def test_truncation_notice(self, workspace, host, recorder):
        task = Task(host=host, cwd=str(workspace), settings=RuntimeSettings(list_files_limit=1))

        await ListFilesTool().execute(ListFilesParams(path=".", recursive=True), task, recorder.build())

        assert "(File list truncated." in recorder.results[0]

    @pytest.mark.asyncio
    async def test_empty_directory(self, workspace, host, recorder):
        (workspace / "empty").mkdir()
        task = Task(host=host, cwd=str(workspace))

        await ListFilesTool().execute(ListFilesParams(path="empty"), task, recorder.build())

        assert recorder.results == ["No files found."]

    @pytest.mark.asyncio
    async def test_missing_path(self, task, recorder):
        await ListFilesTool().execute(ListFilesParams(path=""), task, recorder.build())

        assert task.consecutive_mistake_count == 1
        assert "'path'" in recorder.results[0]

    @pytest.mark.asyncio
    async def test_rejected(self, workspace, host, make_recorder):
        recorder = make_recorder(approve=False)
        task = Task(host=host, cwd=str(workspace))

        await ListFilesTool().execute(ListFilesParams(path="src"), task, recorder.build())

        assert recorder.results == []

    @pytest.mark.asyncio
    async def test_partial_preview(self, workspace, host):
        task = Task(host=host, cwd=str(workspace))
        block = ToolUse(name="list_files", params={"path": "src</pa"}, partial=True)

        await ListFilesTool().handle_partial(task, block)

        payload = json.loads(host.asks[0][1])
        assert payload["path"] == "src"
        assert payload["content"] == ""
        assert payload["tool"] == "listFilesTopLevel"

    def test_describe(self):
        block = ToolUse(name="list_files", params={"path": "src"})
        assert ListFilesTool().describe(block) == "[list_files for 'src']"
