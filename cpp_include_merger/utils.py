"""
Path utilities for the C++ include merger.
"""

import os
from pathlib import Path


def normalize_path(path: str | Path) -> str:
    """Return an absolute, normalized path string usable as an identity key.

    Symlinks are not resolved: two different spellings of the same file
    that only differ by ``..`` or ``.`` segments map to the same key.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def resolve_include(including_file: str, target: str) -> str:
    """Resolve a quoted include target relative to the including file's directory."""
    return normalize_path(os.path.join(os.path.dirname(including_file), target))


def relative_label(path: str, root: str) -> str:
    """Path of ``path`` relative to ``root`` with forward slashes.

    Examples:
        ("/p/lib/util.h", "/p") -> "lib/util.h"
        ("/shared/x.h", "/p") -> "../shared/x.h"

    Falls back to the absolute path when no relative path exists
    (different drives on Windows).
    """
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        rel = path
    return rel.replace(os.sep, "/")
