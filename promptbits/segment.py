"""Styled text segments that make up a prompt module."""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcwidth

_RESET = "\x1b[0m"

_NAMED_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "purple": 5,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

Color = str | int | tuple[int, int, int]


def _color_code(color: Color, base: int) -> str:
    """Return the SGR code for a colour; ``base`` is 30 for foreground, 40 for background."""
    if isinstance(color, str):
        try:
            return str(base + _NAMED_COLORS[color.lower()])
        except KeyError:
            raise ValueError(f"unknown colour name: {color!r}") from None
    if isinstance(color, int):
        if not 0 <= color <= 255:
            raise ValueError(f"fixed colour out of range: {color}")
        return f"{base + 8};5;{color}"
    red, green, blue = color
    return f"{base + 8};2;{red};{green};{blue}"


@dataclass(frozen=True)
class Style:
    """A terminal text style: colours plus text attributes.

    Colours may be a name (``"red"``), a 256-colour index, or an RGB tuple.
    """

    foreground: Color | None = None
    background: Color | None = None
    bold: bool = False
    dimmed: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    hidden: bool = False
    strikethrough: bool = False

    @property
    def is_plain(self) -> bool:
        return self == Style()

    def _prefix(self) -> str:
        flags = (
            (self.bold, "1"),
            (self.dimmed, "2"),
            (self.italic, "3"),
            (self.underline, "4"),
            (self.blink, "5"),
            (self.reverse, "7"),
            (self.hidden, "8"),
            (self.strikethrough, "9"),
        )
        codes = [code for enabled, code in flags if enabled]
        if self.background is not None:
            codes.append(_color_code(self.background, 40))
        if self.foreground is not None:
            codes.append(_color_code(self.foreground, 30))
        return "\x1b[" + ";".join(codes) + "m"

    def paint(self, text: str) -> str:
        """Wrap ``text`` in the escape codes for this style."""
        if self.is_plain:
            return text
        return f"{self._prefix()}{text}{_RESET}"


@dataclass
class Segment:
    """A single piece of a module's output, optionally with its own style.

    A segment without a style inherits the style of the module holding it.
    """

    name: str
    value: str = ""
    style: Style | None = None

    def ansi_string(self) -> str:
        """Return the value, painted with the segment's style if it has one."""
        if self.style is None:
            return self.value
        return self.style.paint(self.value)

    def is_empty(self) -> bool:
        """True if the value holds nothing but whitespace."""
        return not self.value.strip()

    def __str__(self) -> str:
        return self.ansi_string()


def count_wide_chars(value: str) -> int:
    """Count the characters that take more than one terminal column."""
    return sum(1 for char in value if wcwidth(char) > 1)