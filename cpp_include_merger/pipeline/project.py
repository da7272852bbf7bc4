"""
Project workflow around the include merger.

A project looks like::

    <root>/
        lib/      shared headers and sources
        main/     entry files (one per problem)
        output/   merged files, created on demand

The merger itself only needs the entry file and the root; this module
locates the root, checks the entry file, and writes the merged result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import MergeConfig, OutputMode
from .merger import AtomicWriter, IncludeMerger, MergeResult, ProjectLayoutError

logger = logging.getLogger(__name__)


def has_layout(directory: Path, config: MergeConfig) -> bool:
    """Whether ``directory`` holds both the lib and main directories."""
    project = config.project
    return (directory / project.lib_dir).is_dir() and (directory / project.main_dir).is_dir()


def find_project_root(entry_path: Path, config: MergeConfig) -> Path:
    """Walk up from the entry file to the first directory with the project layout.

    Falls back to the entry file's directory when no ancestor matches.
    """
    entry_path = entry_path.resolve()
    for directory in entry_path.parents:
        if has_layout(directory, config):
            return directory
    return entry_path.parent


def check_entry(entry_path: Path, config: MergeConfig) -> None:
    """Reject entry files that are not C++ sources.

    Raises:
        ProjectLayoutError: If the suffix is not one of config.project.source_suffixes
    """
    suffixes = config.project.source_suffixes
    if entry_path.suffix not in suffixes:
        raise ProjectLayoutError(f"Entry file must be one of {', '.join(suffixes)}: {entry_path.name}")


def check_layout(root: Path, config: MergeConfig) -> None:
    """Raise ProjectLayoutError when the layout is required but missing."""
    if config.project.require_layout and not has_layout(root, config):
        raise ProjectLayoutError(
            f"Project structure is incorrect: {root} must contain '{config.project.lib_dir}' and '{config.project.main_dir}' directories"
        )


def default_output_path(root: Path, entry_path: Path, config: MergeConfig) -> Path:
    return root / config.project.output_dir / entry_path.name


@dataclass
class ProjectMerge:
    """Result of merging one entry file of a project."""

    root: Path
    entry_path: Path
    output_path: Path | None
    result: MergeResult


def merge_project_file(
    entry_path: Path,
    config: MergeConfig | None = None,
    root: Path | None = None,
    output_path: Path | None = None,
    write: bool = True,
) -> ProjectMerge:
    """Merge an entry file and, unless ``write`` is False, store the result.

    Args:
        entry_path: The entry .cpp file
        config: Merge options
        root: Project root; discovered from the entry path if omitted
        output_path: Target file; defaults to <root>/<output_dir>/<entry name>
        write: Whether to write the merged file

    Returns:
        ProjectMerge describing what was done

    Raises:
        ProjectLayoutError: If the entry file or the project layout is rejected
        CycleError: If a local include chain is circular
        MissingIncludeError: In strict mode, if a local include was skipped
        FileExistsError: In error output mode, if the target exists
        IncludeMergeError: If the merged code fails validation
    """
    config = config or MergeConfig()
    entry_path = entry_path.resolve()
    check_entry(entry_path, config)

    root = root.resolve() if root is not None else find_project_root(entry_path, config)
    check_layout(root, config)
    logger.debug("Project root: %s", root)

    content = entry_path.read_text(encoding="utf-8")
    result = IncludeMerger(config).run(entry_path, content, root)

    if not write:
        return ProjectMerge(root=root, entry_path=entry_path, output_path=None, result=result)

    if output_path is None:
        output_path = default_output_path(root, entry_path, config)
    write_output(output_path, result.text, config)
    logger.info("Merged %d library sections into %s", len(result.sections), output_path)

    return ProjectMerge(root=root, entry_path=entry_path, output_path=output_path, result=result)


def write_output(path: Path, content: str, config: MergeConfig) -> None:
    """Write merged content honoring the output configuration."""
    output = config.output
    validate = output.validate_before_write
    writer = AtomicWriter()

    if not output.atomic_write:
        if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        if validate:
            writer.validate(content)
        writer.write_plain(path, content)
    elif output.mode == OutputMode.ERROR_IF_EXISTS:
        writer.write_if_not_exists(path, content, validate)
    else:
        writer.write(path, content, validate)
