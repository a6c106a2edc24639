"""ANSI color and style codes, keyed by the names used in formatter options."""

from typing import Callable

Stylizer = Callable[[str, str], str]

_BASE_COLORS = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}

# name -> (open SGR code, close SGR code)
STYLES: dict[str, tuple[int, int]] = {
    "bright": (1, 22),
    "italic": (3, 23),
    "underline": (4, 24),
    "inverse": (7, 27),
    "strikethrough": (9, 29),
}

for _name, _code in _BASE_COLORS.items():
    _title = _name.capitalize()
    STYLES[_name] = (_code, 39)
    STYLES["bright" + _title] = (_code + 60, 39)
    STYLES["bg" + _title] = (_code + 10, 49)
    STYLES["bgBright" + _title] = (_code + 70, 49)


def stylize_with_color(text: str, color: str) -> str:
    """Wrap text in the ANSI codes for color. Unknown colors leave text as is."""
    if not text:
        return ""
    codes = STYLES.get(color)
    if codes is None:
        return text
    start, end = codes
    return f"\033[{start}m{text}\033[{end}m"


def stylize_without_color(text: str, color: str) -> str:
    return text


def get_stylizer(enabled: bool) -> Stylizer:
    """Return the stylize function for the given color setting."""
    return stylize_with_color if enabled else stylize_without_color
