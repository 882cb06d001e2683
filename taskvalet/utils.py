"""
Small helpers shared by the parsers and the tools
"""

import os
from typing import Any, Optional


def coerce_int(value: Any) -> Optional[int]:
    """
    Coerce a native number or numeric string to int

    Integral floats and strings such as ``12.0`` or ``"12.0"`` are accepted.
    Returns None for anything else, including fractional and non-finite values.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 10)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return None


def get_readable_path(cwd: str, rel_path: Optional[str] = None) -> str:
    """Path as shown to the user: relative inside cwd, absolute outside it"""
    absolute = os.path.abspath(os.path.join(cwd, rel_path or ""))
    if absolute == os.path.abspath(cwd):
        return os.path.basename(absolute) or absolute
    if is_path_outside(cwd, absolute):
        return absolute
    return os.path.relpath(absolute, cwd)


def is_path_outside(root: str, path: str) -> bool:
    """Check whether an absolute path escapes the given root directory"""
    root = os.path.abspath(root)
    path = os.path.abspath(path)
    try:
        return os.path.commonpath([root, path]) != root
    except ValueError:
        # Different drives on Windows
        return True
