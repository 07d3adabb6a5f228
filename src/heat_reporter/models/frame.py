"""Data model for a single parsed backtrace entry."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from heat_reporter.core.source import Source

UNKNOWN_CONTAINER = "(Unknown Container)"
UNKNOWN_MODIFICATION_TIME = datetime.fromtimestamp(0, tz=UTC)
UNKNOWN_MODIFICATION_SECONDS = -1

# Directories inside the project that hold someone else's code
VENDORED_DIRECTORIES = frozenset(
    {
        "vendor",
        ".venv",
        "venv",
        ".tox",
        "site-packages",
        "dist-packages",
        "node_modules",
        "bin",
    }
)

TEST_FILE_PREFIX = "test_"
TEST_FILE_SUFFIX = "_test"

PYTHON_FRAME_PATTERN = re.compile(r'^\s*File "([^"]+)", line (\d+)(?:, in (.+?))?\s*$')


def project_root() -> Path:
    """The directory that counts as "the project": the working directory."""
    return Path.cwd()


def _coerce_line(raw_line: Any) -> int:
    """Turn a raw line number into a positive int, defaulting to 1."""
    try:
        line = int(str(raw_line).strip())
    except (TypeError, ValueError):
        return 1
    return line if line >= 1 else 1


def _clean_container(raw_container: str | None) -> str:
    if raw_container is None:
        return UNKNOWN_CONTAINER

    container = raw_container.strip()
    for prefix in ("in `", "in '", "in "):
        if container.startswith(prefix):
            container = container[len(prefix) :]
            break
    container = container.removesuffix("'")

    return container or UNKNOWN_CONTAINER


@dataclass(frozen=True)
class Frame:
    """A single location from a backtrace: file, line number, and container.

    ``line`` is always a positive integer and ``container`` is never empty;
    both are normalized on construction so a garbled backtrace can't leak
    ``None`` or ``0`` into the report.
    """

    path: str
    line: int = 1
    container: str = UNKNOWN_CONTAINER

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", str(self.path))
        object.__setattr__(self, "line", _coerce_line(self.line))
        object.__setattr__(self, "container", _clean_container(self.container))

    def __str__(self) -> str:
        return f"{self.path}:{self.line} in `{self.container}`"

    @property
    def pathname(self) -> Path:
        """The path as given."""
        return Path(self.path)

    @property
    def absolute_pathname(self) -> Path:
        """The path resolved against the working directory (symlinks untouched)."""
        return Path(os.path.abspath(self.path))

    @property
    def filename(self) -> str:
        """The file name portion of the path."""
        return self.pathname.name

    @property
    def directory(self) -> str:
        """The directory portion of the path."""
        return str(self.pathname.parent)

    @property
    def exists(self) -> bool:
        """Whether the file is present on disk."""
        try:
            return self.pathname.is_file()
        except (OSError, ValueError):
            return False

    def _project_parts(self) -> tuple[str, ...] | None:
        """Path components below the project root, or None when outside it."""
        try:
            return self.absolute_pathname.relative_to(project_root()).parts
        except ValueError:
            return None

    @property
    def is_vendored_file(self) -> bool:
        """True if the file lives under the project root in a vendored or bin directory."""
        parts = self._project_parts()
        if not parts:
            return False
        return any(part in VENDORED_DIRECTORIES for part in parts[:-1])

    @property
    def is_project_file(self) -> bool:
        """True if the file is project code (source or test), excluding vendored code."""
        parts = self._project_parts()
        return bool(parts) and not self.is_vendored_file

    @property
    def is_test_file(self) -> bool:
        """True if the file name follows the ``test_*`` or ``*_test`` convention."""
        return self.filename.startswith(TEST_FILE_PREFIX) or self.pathname.stem.endswith(
            TEST_FILE_SUFFIX
        )

    @property
    def is_source_file(self) -> bool:
        """True if the file is project code that is not a test."""
        return self.is_project_file and not self.is_test_file

    @property
    def mtime(self) -> datetime:
        """Last modification time, or epoch zero if the file can't be found."""
        try:
            return datetime.fromtimestamp(self.pathname.stat().st_mtime, tz=UTC)
        except (OSError, ValueError):
            return UNKNOWN_MODIFICATION_TIME

    @property
    def age_in_seconds(self) -> int:
        """Seconds since the file was modified, or -1 if the file can't be found."""
        if not self.exists:
            return UNKNOWN_MODIFICATION_SECONDS
        return int((datetime.now(tz=UTC) - self.mtime).total_seconds())

    @property
    def relative_filename(self) -> str:
        """The path relative to the project root when inside it, otherwise as given."""
        parts = self._project_parts()
        if not parts:
            return self.path
        return Path(*parts).as_posix()

    @property
    def relative_directory(self) -> str:
        """The directory relative to the project root with a trailing slash, or ''."""
        parent = Path(self.relative_filename).parent.as_posix()
        return "" if parent == "." else f"{parent}/"

    @property
    def short(self) -> str:
        """ex. ``dir/file.py:23``"""
        return f"{self.relative_filename}:{self.line}"

    def source_code(self, max_line_count: int = 1) -> Source:
        """The source code at (and optionally around) this location."""
        from heat_reporter.core.source import Source

        return Source(self.pathname, line_number=self.line, max_line_count=max_line_count)

    def to_dict(self) -> dict[str, Any]:
        """Serializable location with a project-relative file path."""
        return {
            "file": self.relative_filename,
            "line": self.line,
            "container": self.container,
        }


def parse_frame(raw_text: str | None) -> Frame | None:
    """Parse one raw backtrace line into a Frame.

    Recognizes ``path:line:in `container'`` (the container segment is
    optional) as well as Python traceback lines of the form
    ``File "path", line N, in name``.

    Args:
        raw_text: A single backtrace entry

    Returns:
        The parsed Frame, or None when there's nothing usable in the text
    """
    if raw_text is None:
        return None

    text = str(raw_text).strip()
    if not text:
        return None

    python_match = PYTHON_FRAME_PATTERN.match(text)
    if python_match:
        return Frame(
            path=python_match.group(1),
            line=_coerce_line(python_match.group(2)),
            container=python_match.group(3) or "<module>",
        )

    raw_path, *rest = text.split(":", 2)
    if not raw_path.strip():
        return None

    raw_line = rest[0] if rest else None
    raw_container = rest[1] if len(rest) > 1 else None

    return Frame(
        path=raw_path.strip(),
        line=_coerce_line(raw_line),
        container=raw_container if raw_container is not None else UNKNOWN_CONTAINER,
    )
