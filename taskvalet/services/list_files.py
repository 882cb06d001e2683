"""
Directory listing with a result cap

Directories are returned with a trailing separator so callers can tell them
apart from files without another stat call.
"""

import logging
import os
from collections import deque
from typing import List, Tuple

logger = logging.getLogger(__name__)

# Skipped while recursing; still listed when they sit at the top level
DIRS_TO_IGNORE = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    ".mypy_cache",
    ".pytest_cache",
    ".tox",
    "dist",
    "build",
    "target",
    "vendor",
})


def _is_root(path: str) -> bool:
    return os.path.dirname(path) == path


def list_files(dir_path: str, recursive: bool, limit: int) -> Tuple[List[str], bool]:
    """
    List entries under a directory

    Args:
        dir_path: Absolute directory path
        recursive: Walk sub-directories breadth-first when True
        limit: Maximum number of entries to return

    Returns:
        (paths, did_hit_limit); directory paths end with ``os.sep``
    """
    absolute = os.path.abspath(dir_path)

    # Never walk a filesystem root or the home directory itself
    if _is_root(absolute) or absolute == os.path.expanduser("~"):
        return [absolute.rstrip(os.sep) + os.sep], False

    results: List[str] = []
    queue = deque([absolute])

    while queue:
        current = queue.popleft()
        try:
            with os.scandir(current) as entries:
                children = sorted(entries, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list {current}: {e}")
            continue

        for entry in children:
            if len(results) >= limit:
                return results, True

            is_dir = entry.is_dir(follow_symlinks=False)
            if is_dir:
                results.append(entry.path + os.sep)
                if recursive and entry.name not in DIRS_TO_IGNORE and not entry.name.startswith("."):
                    queue.append(entry.path)
            else:
                results.append(entry.path)

    return results, False
