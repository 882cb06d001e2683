"""
Tests for the legacy tag-delimited stream parser.
"""

import pytest

from taskvalet.parsing import LegacyStreamParser, parse_assistant_message
from taskvalet.tools.models import TextContent, ToolUse


class TestParseAssistantMessage:
    """Tests for whole-message parsing"""

    def test_text_then_tool(self):
        message = (
            "Let me look around.\n"
            "<list_files>\n<path>src</path>\n<recursive>true</recursive>\n</list_files>"
        )
        blocks = parse_assistant_message(message)

        assert blocks == [
            TextContent(content="Let me look around.", partial=False),
            ToolUse(name="list_files", params={"path": "src", "recursive": "true"}, partial=False),
        ]

    def test_unclosed_tool_is_partial(self):
        blocks = parse_assistant_message("<attempt_completion><result>Almost th")

        assert len(blocks) == 1
        assert blocks[0].partial is True
        assert blocks[0].params == {"result": "Almost th"}

    def test_trailing_text_is_partial(self):
        blocks = parse_assistant_message("Thinking about it")
        assert blocks == [TextContent(content="Thinking about it", partial=True)]

    def test_unknown_tags_are_text(self):
        blocks = parse_assistant_message("<thinking>hmm</thinking>")
        assert len(blocks) == 1
        assert isinstance(blocks[0], TextContent)
        assert "<thinking>" in blocks[0].content

    def test_unknown_param_tags_are_ignored(self):
        blocks = parse_assistant_message("<list_files><path>a</path><colour>red</colour></list_files>")
        assert blocks[0].params == {"path": "a"}

    def test_write_to_file_content_may_contain_closing_tag(self):
        message = (
            "<write_to_file><path>t.xml</path>"
            "<content><content>inner</content></content>"
            "</write_to_file>"
        )
        blocks = parse_assistant_message(message)

        assert blocks[0].params["content"] == "<content>inner</content>"
        assert blocks[0].partial is False

    def test_param_values_are_stripped(self):
        blocks = parse_assistant_message("<new_task><mode>\n code \n</mode></new_task>")
        assert blocks[0].params["mode"] == "code"


class TestLegacyStreamParser:
    """Tests for chunked parsing"""

    def test_snapshots_until_closed(self):
        parser = LegacyStreamParser()

        first = parser.feed("<list_files><pa")
        second = parser.feed("th>src</path>")
        third = parser.feed("</list_files>")

        assert first[-1].partial is True
        assert second[-1].params == {"path": "src"}
        assert second[-1].partial is True
        assert third == [ToolUse(name="list_files", params={"path": "src"}, partial=False)]

    def test_finalize_completes_open_blocks(self):
        parser = LegacyStreamParser()
        parser.feed("Done here. <attempt_completion><result>ok")

        blocks = parser.finalize()

        assert all(not block.partial for block in blocks)
        assert blocks[-1] == ToolUse(name="attempt_completion", params={"result": "ok"}, partial=False)

    def test_feed_after_finalize_raises(self):
        parser = LegacyStreamParser()
        parser.finalize()
        with pytest.raises(RuntimeError):
            parser.feed("more")

    def test_reset(self):
        parser = LegacyStreamParser()
        parser.feed("text")
        parser.finalize()
        parser.reset()

        assert parser.text == ""
        assert parser.blocks == []
        assert parser.feed("again")[0].content == "again"


class TestToolUseSnapshot:
    """Tests for ToolUse immutability"""

    def test_params_are_read_only(self):
        block = parse_assistant_message("<list_files><path>src</path></list_files>")[0]

        with pytest.raises(TypeError):
            block.params["path"] = "elsewhere"

        assert block.params == {"path": "src"}
        assert block.to_dict()["params"] == {"path": "src"}
        assert isinstance(block.to_dict()["params"], dict)

    def test_params_are_copied_from_caller(self):
        """Changing the dict a ToolUse was built from does not change the ToolUse"""
        source = {"path": "src"}
        block = ToolUse(name="list_files", params=source)

        source["path"] = "elsewhere"

        assert block.params["path"] == "src"
        assert block == ToolUse(name="list_files", params={"path": "src"})

    def test_earlier_snapshots_are_unchanged_by_later_chunks(self):
        parser = LegacyStreamParser()

        first = parser.feed("<new_task><mode>co")[-1]
        parser.feed("de</mode><message>Go</message></new_task>")

        assert first.params == {"mode": "co"}
