"""Token lines for a snippet of source code."""

from __future__ import annotations

from pathlib import Path

from heat_reporter.models.frame import Frame

from .token import Line, Token

DEFAULT_LINE_COUNT = 3
DEFAULT_INDENTATION_SPACES = 2


class SourceCode:
    """Renders the lines of code around a target line, numbers right-aligned.

    The target line is shown in the default style and its neighbors muted.
    An unreadable file renders as no lines at all.

    Example:
        SourceCode("app/models.py", 42).tokens()
        # [[Token("muted", "  41 "), Token("muted", "def save(self):")],
        #  [Token("default", "  42 "), Token("default", "    raise ValueError")],
        #  [Token("muted", "  43 "), Token("muted", "")]]
    """

    def __init__(
        self,
        filename: str | Path,
        line_number: int,
        max_line_count: int = DEFAULT_LINE_COUNT,
        indentation: int = DEFAULT_INDENTATION_SPACES,
    ) -> None:
        # Frame loads the reader lazily, keeping output free of core imports
        self.source = Frame(str(filename), line_number).source_code(max_line_count)
        self.indentation = indentation

    @property
    def max_line_number_digits(self) -> int:
        return max((len(str(number)) for number in self.source.line_numbers), default=0)

    def tokens(self) -> list[Line]:
        lines: list[Line] = []
        width = self.max_line_number_digits
        for number, code in zip(self.source.line_numbers, self.source.lines, strict=False):
            style = "default" if number == self.source.line_number else "muted"
            gutter = f"{' ' * self.indentation}{str(number).rjust(width)} "
            lines.append([Token(style, gutter), Token(style, code)])
        return lines
