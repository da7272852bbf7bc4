"""
Atomic file writer for merged sources.

Ensures that file writes are atomic so an interrupted run never leaves
a half-written submission file behind.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from .base import IncludeMergeError

# Comments and string/char literals, which may hold unmatched braces.
# A quote directly after an identifier or digit is a digit separator (1'000).
_NON_CODE = re.compile(
    r"""
    //[^\n]*
    | /\*.*?\*/
    | (?<![0-9A-Za-z_])(?:u8|[uUL])?R"([^()\\\s]{0,16})\(.*?\)\1"
    | (?<![0-9A-Za-z_])(?:u8|[uUL])?"(?:\\.|[^"\\\n])*"
    | (?<![0-9A-Za-z_])(?:u8|[uUL])?'(?:\\.|[^'\\\n])*'
    """,
    re.DOTALL | re.VERBOSE,
)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function for C++ code
        """
        self._validate = validate or self._default_validate_cpp

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            IncludeMergeError: If validation fails
            OSError: If file operations fail
        """
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Create temporary file in the same directory
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            # Write content to temporary file
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            # Validate if requested
            if validate:
                self.validate(content)

            # Atomic replace
            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            FileExistsError: If the file already exists
            IncludeMergeError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, validate)
        return True

    def validate(self, content: str) -> None:
        """Run the configured validation on content.

        Raises:
            IncludeMergeError: If validation fails
        """
        self._validate(content)

    @staticmethod
    def write_plain(path: Path, content: str) -> None:
        """Non-atomic write, used when atomic writes are disabled."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)

    def _default_validate_cpp(self, content: str) -> None:
        """Default C++ validation.

        Only cheap structural checks; the merged file is not compiled.

        Raises:
            IncludeMergeError: If validation fails
        """
        # An empty file cannot be a valid submission
        if not content.strip():
            raise IncludeMergeError("Merged C++ code is empty")

        # Check for balanced braces (simple heuristic)
        code = _NON_CODE.sub("", content)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise IncludeMergeError(f"Merged C++ code has unbalanced braces: {open_braces} open, {close_braces} close")
