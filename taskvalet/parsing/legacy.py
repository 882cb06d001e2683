"""
TaskValet Legacy Stream Parser - Tag-delimited tool blocks embedded in free text

The legacy protocol has the model write tool calls inline:

    I'll look at the directory first.
    <list_files>
    <path>src</path>
    <recursive>true</recursive>
    </list_files>

Text arrives in chunks. Every call to ``feed()`` returns a full snapshot of
the message so far: TextContent and ToolUse blocks, where the last block is
``partial=True`` while its closing tag has not been seen yet. Only names in
TOOL_NAMES open a tool block and only names in TOOL_PARAM_NAMES open a
parameter inside it; any other tag is treated as literal text.
"""

import logging
from typing import Dict, List, Optional

from ..constants import TOOL_NAMES, TOOL_PARAM_NAMES
from ..tools.models import AssistantMessageContent, TextContent, ToolUse

logger = logging.getLogger(__name__)

_TOOL_OPEN_TAGS = [(f"<{name}>", name) for name in TOOL_NAMES]
_PARAM_OPEN_TAGS = [(f"<{name}>", name) for name in TOOL_PARAM_NAMES]


def _match_tag(text: str, index: int, candidates) -> Optional[str]:
    for tag, name in candidates:
        if text.startswith(tag, index):
            return name
    return None


def parse_assistant_message(message: str) -> List[AssistantMessageContent]:
    """
    Parse an assistant message (complete or still streaming) into content blocks

    Args:
        message: All text received so far

    Returns:
        TextContent and ToolUse blocks in emission order. A block that is
        still open at the end of the text is marked partial.
    """
    blocks: List[AssistantMessageContent] = []
    text_start = 0

    tool_name: Optional[str] = None
    tool_params: Dict[str, str] = {}
    param_name: Optional[str] = None
    param_start = 0

    i = 0
    length = len(message)
    while i < length:
        if param_name is not None:
            closing = f"</{param_name}>"
            if message.startswith(closing, i):
                tool_params[param_name] = message[param_start:i].strip()
                param_name = None
                i += len(closing)
            else:
                i += 1
            continue

        if tool_name is not None:
            closing = f"</{tool_name}>"
            if message.startswith(closing, i):
                blocks.append(ToolUse(name=tool_name, params=dict(tool_params), partial=False))
                tool_name = None
                tool_params = {}
                i += len(closing)
                text_start = i
                continue

            opened = _match_tag(message, i, _PARAM_OPEN_TAGS) if message[i] == "<" else None
            if opened is None:
                i += 1
                continue

            i += len(opened) + 2
            value_end = _file_content_end(message, i, tool_name, opened)
            if value_end is not None:
                # write_to_file content may itself contain </content>
                tool_params[opened] = message[i:value_end].strip()
                i = value_end + len(f"</{opened}>")
            else:
                param_name = opened
                param_start = i
            continue

        opened = _match_tag(message, i, _TOOL_OPEN_TAGS) if message[i] == "<" else None
        if opened is None:
            i += 1
            continue

        text = message[text_start:i].strip()
        if text:
            blocks.append(TextContent(content=text, partial=False))
        tool_name = opened
        tool_params = {}
        i += len(opened) + 2

    if param_name is not None:
        tool_params[param_name] = message[param_start:].strip()

    if tool_name is not None:
        blocks.append(ToolUse(name=tool_name, params=dict(tool_params), partial=True))
    else:
        text = message[text_start:].strip()
        if text:
            blocks.append(TextContent(content=text, partial=True))

    return blocks


def _file_content_end(message: str, start: int, tool_name: str, param: str) -> Optional[int]:
    if tool_name != "write_to_file" or param != "content":
        return None
    tool_close = message.find(f"</{tool_name}>", start)
    if tool_close == -1:
        return None
    param_close = message.rfind(f"</{param}>", start, tool_close)
    return param_close if param_close != -1 else None


class LegacyStreamParser:
    """
    Incremental wrapper around parse_assistant_message()

    Usage:
        parser = LegacyStreamParser()
        async for chunk in stream:
            blocks = parser.feed(chunk)
            ...
        blocks = parser.finalize()
    """

    def __init__(self):
        self._buffer: List[str] = []
        self._blocks: List[AssistantMessageContent] = []
        self._finalized = False

    @property
    def text(self) -> str:
        return "".join(self._buffer)

    @property
    def blocks(self) -> List[AssistantMessageContent]:
        return list(self._blocks)

    def feed(self, chunk: str) -> List[AssistantMessageContent]:
        """Append a chunk and return the refreshed block snapshot"""
        if self._finalized:
            raise RuntimeError("Cannot feed a finalized LegacyStreamParser")
        self._buffer.append(chunk)
        self._blocks = parse_assistant_message(self.text)
        return self.blocks

    def finalize(self) -> List[AssistantMessageContent]:
        """
        Mark the stream as finished

        Blocks still open when the stream ends are completed with whatever
        content they have; a tool left open is dispatched as complete.
        """
        self._blocks = parse_assistant_message(self.text)
        finalized: List[AssistantMessageContent] = []
        for block in self._blocks:
            if not block.partial:
                finalized.append(block)
            elif isinstance(block, ToolUse):
                logger.debug(f"Finalizing unclosed tool block: {block.name}")
                finalized.append(ToolUse(name=block.name, params=dict(block.params), partial=False))
            else:
                finalized.append(TextContent(content=block.content, partial=False))
        self._blocks = finalized
        self._finalized = True
        return self.blocks

    def reset(self) -> None:
        self._buffer = []
        self._blocks = []
        self._finalized = False
