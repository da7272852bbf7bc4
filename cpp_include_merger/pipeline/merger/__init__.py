"""
Merger module.

Resolves local includes of a C++ entry file and assembles a single
self-contained source, plus the atomic writer used to store it.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .base import (
    CycleError,
    IncludeMergeError,
    MergeState,
    MissingIncludeError,
    ProjectContext,
    ProjectLayoutError,
)
from .include_merger import IncludeMerger, MergeResult, merge

__all__ = [
    "IncludeMerger",
    "MergeResult",
    "MergeState",
    "ProjectContext",
    "IncludeMergeError",
    "CycleError",
    "MissingIncludeError",
    "ProjectLayoutError",
    "AtomicWriter",
    "merge",
]
