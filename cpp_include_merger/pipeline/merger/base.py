"""
Base types for include merging.

Errors raised by the merger and the per-run context/state objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class IncludeMergeError(Exception):
    """Base class for errors raised while merging includes.

    Subclasses:
    - CycleError: a local include chain loops back on itself
    - MissingIncludeError: strict mode and a local include could not be read
    - ProjectLayoutError: the project root lacks the expected directories
    """

    pass


class CycleError(IncludeMergeError):
    """Raised when a circular local include chain is detected.

    Attributes:
        chain: Paths from the first occurrence of the repeated file to its repetition
    """

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"Circular include detected: {' -> '.join(self.chain)}")


class MissingIncludeError(IncludeMergeError):
    """Raised in strict mode when local includes were skipped."""

    def __init__(self, skipped: list[tuple[str, str]]):
        self.skipped = list(skipped)
        details = ", ".join(f'"{target}" (from {source})' for source, target in self.skipped)
        super().__init__(f"Unresolved local includes: {details}")


class ProjectLayoutError(IncludeMergeError):
    """Raised when the project root does not have the required layout."""

    pass


@dataclass(frozen=True)
class ProjectContext:
    """Immutable inputs of one merge run.

    Attributes:
        root: Normalized project root directory
        entry_path: Normalized path of the entry file
    """

    root: str
    entry_path: str


@dataclass
class MergeState:
    """Mutable state of one merge run, created fresh by every merge call.

    Attributes:
        visited: Paths already processed or being processed
        recursion_stack: Paths currently being resolved, outermost first
        standard_includes: Distinct standard include lines
        using_declarations: Distinct ``using`` lines
        library_sections: Rendered non-entry sections in post-order
        section_labels: Root-relative labels of library_sections, same order
        skipped_includes: (including file, target) pairs that were dropped
    """

    visited: set[str] = field(default_factory=set)
    recursion_stack: list[str] = field(default_factory=list)
    standard_includes: set[str] = field(default_factory=set)
    using_declarations: set[str] = field(default_factory=set)
    library_sections: list[str] = field(default_factory=list)
    section_labels: list[str] = field(default_factory=list)
    skipped_includes: list[tuple[str, str]] = field(default_factory=list)

    def cycle_chain(self, path: str) -> list[str] | None:
        """Chain from the first occurrence of ``path`` on the stack back to ``path``."""
        if path not in self.recursion_stack:
            return None
        start = self.recursion_stack.index(path)
        return self.recursion_stack[start:] + [path]
