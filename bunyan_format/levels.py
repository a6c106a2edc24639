"""Bunyan severity levels and their display names."""

TRACE = 10
DEBUG = 20
INFO = 30
WARN = 40
ERROR = 50
FATAL = 60

LEVEL_FROM_NAME = {
    "trace": TRACE,
    "debug": DEBUG,
    "info": INFO,
    "warn": WARN,
    "error": ERROR,
    "fatal": FATAL,
}

NAME_FROM_LEVEL = {level: name for name, level in LEVEL_FROM_NAME.items()}
UPPER_NAME_FROM_LEVEL = {level: name.upper() for name, level in LEVEL_FROM_NAME.items()}

# 4-letter names get a leading space so every label is 5 wide
UPPER_PADDED_NAME_FROM_LEVEL = {
    level: (" " if len(name) == 4 else "") + name.upper()
    for name, level in LEVEL_FROM_NAME.items()
}


def lookup_level(table: dict, level):
    """Return table[level], or None when the level is unknown or unhashable."""
    try:
        return table.get(level)
    except TypeError:
        return None


def level_label(level, padded: bool = True) -> str:
    """Uppercase label for a level, falling back to LVL<n> for unknown codes."""
    table = UPPER_PADDED_NAME_FROM_LEVEL if padded else UPPER_NAME_FROM_LEVEL
    label = lookup_level(table, level)
    if label is None:
        return f"LVL{level}"
    return label


def level_to_name(level):
    """Map a numeric level to its uppercase name for JSON output.

    Unknown levels are returned unchanged so the field is never dropped.
    """
    name = lookup_level(UPPER_NAME_FROM_LEVEL, level)
    return level if name is None else name
