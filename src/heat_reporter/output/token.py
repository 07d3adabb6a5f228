"""Styled text fragments, the building blocks of every line of output."""

from __future__ import annotations

from dataclasses import dataclass

from heat_reporter.utils.errors import InvalidStyleError

ESC_SEQUENCE = "\033["
END_SEQUENCE = "m"
RESET = f"{ESC_SEQUENCE}0{END_SEQUENCE}"

WEIGHTS: dict[str, int] = {
    "default": 0,
    "bold": 1,
    "light": 2,
    "italic": 3,
}

COLORS: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "gray": 37,
    "default": 39,
}

# style name -> (weight, color)
STYLES: dict[str, tuple[str, str]] = {
    "success": ("default", "green"),
    "slow": ("default", "green"),
    "painful": ("bold", "green"),
    "error": ("bold", "red"),
    "broken": ("bold", "red"),
    "failure": ("default", "red"),
    "skipped": ("default", "yellow"),
    "warning_light": ("light", "yellow"),
    "italicized": ("italic", "gray"),
    "bold": ("bold", "default"),
    "default": ("default", "default"),
    "muted": ("light", "gray"),
}

SYMBOLS: dict[str, str] = {
    "middot": "·",
    "arrow": "➜",
    "lead": "|",
}


@dataclass(frozen=True)
class Token:
    """A piece of content and the name of the style to show it in.

    Example:
        Token("error", "Error").render()        # '\\x1b[1;31mError\\x1b[0m'
        Token("error", "Error").render(False)   # 'Error'
    """

    style: str
    content: str

    def __post_init__(self) -> None:
        if self.style not in STYLES:
            raise InvalidStyleError(f"'{self.style}' is not a valid style option for tokens")
        object.__setattr__(self, "content", str(self.content))

    def __str__(self) -> str:
        return self.content

    def render(self, styled: bool = True) -> str:
        """The content, wrapped in ANSI escape sequences when ``styled``."""
        if not styled:
            return self.content
        return f"{self.style_sequence}{self.content}{RESET}"

    @property
    def style_sequence(self) -> str:
        weight, color = STYLES[self.style]
        return f"{ESC_SEQUENCE}{WEIGHTS[weight]};{COLORS[color]}{END_SEQUENCE}"


Line = list[Token]

SPACER = Token("muted", f" {SYMBOLS['middot']} ")
MUTED_ARROW = Token("muted", f" {SYMBOLS['arrow']} ")


def render_line(tokens: Line, styled: bool = True) -> str:
    """Join a line's tokens into a single printable string."""
    return "".join(token.render(styled) for token in tokens)


def pluralize(count: int, singular: str) -> str:
    """``1 test``, ``2 tests``. Naive, but only used for a handful of nouns."""
    text = f"{count} {singular}"
    return text if count == 1 else f"{text}s"
