"""
Include merger: flattens an entry file and its local includes into one file.

The include graph is walked depth-first with an explicit stack of frames.
A frame is popped once all of its lines are consumed, which is the moment
all of its own dependencies have been emitted; its body is appended as a
library section at that point (post-order).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from ...utils import normalize_path, relative_label, resolve_include
from ..config import MergeConfig
from ..scanner import BodyBuilder, LineKind, classify_line, local_include_target, split_lines, strip_directives
from .base import CycleError, MergeState, MissingIncludeError, ProjectContext

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Outcome of a merge run.

    Attributes:
        text: The merged source
        sections: Root-relative labels of the library sections, in output order
        skipped_includes: (including file label, include target) pairs that were dropped
    """

    text: str
    sections: list[str] = field(default_factory=list)
    skipped_includes: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class _Frame:
    """A file being scanned."""

    path: str
    lines: Iterator[str]
    body: BodyBuilder


class IncludeMerger:
    """Merges a C++ entry file with the local headers it includes."""

    def __init__(self, config: MergeConfig | None = None):
        """
        Initialize the merger.

        Args:
            config: Merge options; defaults to MergeConfig()
        """
        self.config = config or MergeConfig()
        self.jinja_env = jinja2.Environment(undefined=jinja2.StrictUndefined)
        self.section_marker = self.jinja_env.from_string(self.config.section_marker)
        self.main_marker = self.jinja_env.from_string(self.config.main_marker)

    def merge(self, entry_path: str | Path, entry_content: str, project_root: str | Path) -> str:
        """Merge an entry file into a single self-contained source.

        Args:
            entry_path: Path of the entry file (its includes resolve against its directory)
            entry_content: Text of the entry file, not re-read from disk
            project_root: Directory that section labels are relative to

        Returns:
            The merged source text

        Raises:
            CycleError: If a local include chain is circular
            MissingIncludeError: In strict mode, if a local include was skipped
        """
        return self.run(entry_path, entry_content, project_root).text

    def run(self, entry_path: str | Path, entry_content: str, project_root: str | Path) -> MergeResult:
        """Same as merge() but also reports the sections and skipped includes."""
        context = ProjectContext(root=normalize_path(project_root), entry_path=normalize_path(entry_path))
        state = MergeState()

        logger.debug("Starting merge for %s", context.entry_path)
        self._walk(context, state, entry_content)

        logger.debug(
            "Collected %d standard includes, %d using declarations, %d library sections",
            len(state.standard_includes),
            len(state.using_declarations),
            len(state.library_sections),
        )

        if self.config.strict and state.skipped_includes:
            raise MissingIncludeError(state.skipped_includes)

        main_code = strip_directives(entry_content, self.config.strip_pragma_once)
        return MergeResult(
            text=self._assemble(state, main_code),
            sections=list(state.section_labels),
            skipped_includes=list(state.skipped_includes),
        )

    def _walk(self, context: ProjectContext, state: MergeState, entry_content: str) -> None:
        """Depth-first traversal of the include graph rooted at the entry file."""
        state.visited.add(context.entry_path)
        frames = [self._open(context.entry_path, entry_content, state)]

        while frames:
            frame = frames[-1]
            line = next(frame.lines, None)

            if line is None:
                frames.pop()
                state.recursion_stack.pop()
                self._finish(context, state, frame)
                continue

            kind = classify_line(line)
            if kind is LineKind.STANDARD_INCLUDE:
                state.standard_includes.add(line.strip())
            elif kind is LineKind.USING:
                state.using_declarations.add(line.strip())
            elif kind is LineKind.LOCAL_INCLUDE:
                child = self._enter(context, state, frame.path, local_include_target(line))
                if child is not None:
                    frames.append(child)
            else:
                frame.body.add(line)

    def _open(self, path: str, text: str, state: MergeState) -> _Frame:
        state.recursion_stack.append(path)
        return _Frame(path=path, lines=iter(split_lines(text)), body=BodyBuilder(self.config.strip_pragma_once))

    def _enter(self, context: ProjectContext, state: MergeState, including: str, target: str) -> _Frame | None:
        """Open a frame for a local include, or None if it must be skipped."""
        path = resolve_include(including, target)

        chain = state.cycle_chain(path)
        if chain is not None:
            raise CycleError([relative_label(p, context.root) for p in chain])

        if path in state.visited:
            logger.debug("Skipping %s: already merged", path)
            return None

        text = self._read(path)
        if text is None:
            label = relative_label(including, context.root)
            state.skipped_includes.append((label, target))
            logger.warning('Skipping include "%s" in %s: file not found or unreadable', target, label)
            return None

        state.visited.add(path)
        return self._open(path, text, state)

    def _finish(self, context: ProjectContext, state: MergeState, frame: _Frame) -> None:
        """Append the section of a fully resolved file."""
        if frame.path == context.entry_path:
            return
        body = frame.body.text()
        if not body:
            return
        label = relative_label(frame.path, context.root)
        state.library_sections.append(self.section_marker.render(path=label) + "\n" + body)
        state.section_labels.append(label)
        logger.debug("Merged %s", label)

    @staticmethod
    def _read(path: str) -> str | None:
        if not os.path.isfile(path):
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None

    def _assemble(self, state: MergeState, main_code: str) -> str:
        groups = []

        comment = self._generation_comment()
        if comment:
            groups.append(comment)

        if state.standard_includes:
            groups.append("\n".join(sorted(state.standard_includes)))
        if state.using_declarations:
            groups.append("\n".join(sorted(state.using_declarations)))
        groups.extend(state.library_sections)

        main_marker = self.main_marker.render()
        groups.append(f"{main_marker}\n{main_code}" if main_code else main_marker)

        return "\n\n".join(groups) + "\n"

    def _generation_comment(self) -> str:
        """Generate a command line comment for the merged file"""
        if not self.config.add_generation_comment:
            return ""

        from ... import __version__

        try:
            from ...cli_utils import reconstruct_command_line
            from ...cpp_include_merger import cpp_include_merger as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "cpp_include_merger"

        return f"// Generated by cpp_include_merger v{__version__} : {command_line}"


def merge(
    entry_path: str | Path,
    entry_content: str,
    project_root: str | Path,
    config: MergeConfig | None = None,
) -> str:
    """Convenience function running a fresh IncludeMerger once."""
    return IncludeMerger(config).merge(entry_path, entry_content, project_root)
