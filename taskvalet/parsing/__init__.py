"""
TaskValet Parsing - Turn model output into ToolUse invocations

Provides:
- NativeToolCallParser: structured function calls (id, name, JSON arguments)
- LegacyStreamParser: streaming tag-delimited tool blocks embedded in text
"""

from .native import NativeToolCallParser
from .legacy import LegacyStreamParser, parse_assistant_message

__all__ = [
    "NativeToolCallParser",
    "LegacyStreamParser",
    "parse_assistant_message",
]
