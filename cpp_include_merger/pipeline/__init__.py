"""
Pipeline - flatten a C++ project into one submission file.

1. Scan: classify each line (standard include, local include, using, body)
2. Resolve: walk local includes depth-first, detecting cycles
3. Assemble: sorted includes, sorted usings, library sections, main code
4. Write: optional atomic write of the result into the project's output directory
"""

from __future__ import annotations

from .config import MergeConfig, OutputConfig, OutputMode, ProjectConfig
from .merger import (
    AtomicWriter,
    CycleError,
    IncludeMergeError,
    IncludeMerger,
    MergeResult,
    MissingIncludeError,
    ProjectLayoutError,
    merge,
)
from .project import ProjectMerge, find_project_root, merge_project_file

__all__ = [
    "IncludeMerger",
    "MergeResult",
    "MergeConfig",
    "OutputConfig",
    "OutputMode",
    "ProjectConfig",
    "IncludeMergeError",
    "CycleError",
    "MissingIncludeError",
    "ProjectLayoutError",
    "AtomicWriter",
    "ProjectMerge",
    "find_project_root",
    "merge_project_file",
    "merge",
]
