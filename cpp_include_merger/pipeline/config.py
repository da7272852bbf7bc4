"""
Configuration for the include merger pipeline.

Every option has a default, so an empty config file is valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Default: overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to run structural checks before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class ProjectConfig:
    """Layout of a competitive programming project."""

    # Directory holding the shared headers/sources
    lib_dir: str = "lib"

    # Directory holding the entry files
    main_dir: str = "main"

    # Directory (relative to the project root) receiving merged files
    output_dir: str = "output"

    # Accepted entry file suffixes
    source_suffixes: list[str] = field(default_factory=lambda: [".cpp"])

    # Fail when the project root lacks lib_dir or main_dir
    require_layout: bool = False


@dataclass
class MergeConfig:
    """Configuration options for include merging."""

    # Jinja2 template of the line preceding each library section
    section_marker: str = "// === {{ path }} ==="

    # Jinja2 template of the line preceding the entry file's code
    main_marker: str = "// === Main Code ==="

    # Drop `#pragma once` lines from merged bodies
    strip_pragma_once: bool = False

    # Raise MissingIncludeError instead of skipping unresolved local includes
    strict: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = False

    project: ProjectConfig = field(default_factory=ProjectConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> MergeConfig:
        """Create a config from a dictionary."""
        config = MergeConfig()
        for k, v in d.items():
            if k == "project" and isinstance(v, dict):
                config.project = ProjectConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "section_marker": self.section_marker,
            "main_marker": self.main_marker,
            "strip_pragma_once": self.strip_pragma_once,
            "strict": self.strict,
            "add_generation_comment": self.add_generation_comment,
            "project": {
                "lib_dir": self.project.lib_dir,
                "main_dir": self.project.main_dir,
                "output_dir": self.project.output_dir,
                "source_suffixes": list(self.project.source_suffixes),
                "require_layout": self.project.require_layout,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
