"""C++ Include Merger

A Python package that flattens a C++ entry file and the local headers it
includes into one self-contained source, for judges that accept a single
file. Standard includes and using declarations are deduplicated and
sorted, library code is emitted in dependency order.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CycleError,
    IncludeMergeError,
    IncludeMerger,
    MergeConfig,
    MissingIncludeError,
    OutputMode,
    ProjectLayoutError,
    merge,
    merge_project_file,
)

__all__ = [
    "IncludeMerger",
    "MergeConfig",
    "OutputMode",
    "IncludeMergeError",
    "CycleError",
    "MissingIncludeError",
    "ProjectLayoutError",
    "AtomicWriter",
    "merge",
    "merge_project_file",
]
