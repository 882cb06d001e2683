"""
Test that the public TaskValet imports work.
"""


def test_core_imports():
    """Test top-level package exports"""
    from taskvalet import (
        NativeToolCallParser,
        LegacyStreamParser,
        ToolUse,
        BaseTool,
        ToolDispatcher,
        Task,
        ConfigLoader,
        __version__,
    )

    assert NativeToolCallParser is not None
    assert LegacyStreamParser is not None
    assert ToolUse is not None
    assert BaseTool is not None
    assert ToolDispatcher is not None
    assert Task is not None
    assert ConfigLoader is not None
    assert __version__ == "0.1.0"


def test_tools_package_imports_before_parsing():
    """The tools package must import on its own"""
    import importlib

    tools = importlib.import_module("taskvalet.tools")
    assert "list_files" in [tool.name for tool in (tools.ListFilesTool(), tools.NewTaskTool())]


def test_closed_name_sets():
    from taskvalet.constants import TOOL_NAMES, TOOL_PARAM_NAMES, is_tool_name, is_tool_param_name

    assert len(TOOL_NAMES) == 21
    assert len(set(TOOL_NAMES)) == len(TOOL_NAMES)
    assert len(set(TOOL_PARAM_NAMES)) == len(TOOL_PARAM_NAMES)
    assert is_tool_name("new_task")
    assert not is_tool_name(None)
    assert is_tool_param_name("todos")
    assert not is_tool_param_name("colour")


def test_typed_argument_map():
    from taskvalet.tools.models import NATIVE_ARG_TYPES, has_native_args

    assert len(NATIVE_ARG_TYPES) == 9
    assert has_native_args("read_file")
    assert not has_native_args("new_task")
