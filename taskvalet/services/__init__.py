"""
TaskValet Services - Filesystem helpers used by the tools
"""

from .list_files import DIRS_TO_IGNORE, list_files

__all__ = ["DIRS_TO_IGNORE", "list_files"]
