"""Small text helpers shared by the record renderers."""

import json
import math
import re
from typing import Any

_LINE_BREAK_RE = re.compile(r"\r?\n")


def indent(block: str) -> str:
    """Prefix every line of block, the first included, with two spaces."""
    return "  " + "\n  ".join(_LINE_BREAK_RE.split(block))


def to_text(value: Any) -> str:
    """Strings verbatim, anything else as compact JSON (5, true, null)."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def is_present(value: Any) -> bool:
    """Truthiness where an object or array counts as present even when empty."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def format_body(body: Any) -> str:
    """Objects and arrays pretty-printed as JSON, everything else as text."""
    if isinstance(body, (dict, list)):
        return pretty_json(body)
    return to_text(body)


def _parse_number(literal: str):
    # 2.0 decodes as 2 so integral numbers print without a trailing .0;
    # literals that overflow to infinity are not representable in JSON output
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"{literal} overflows a JSON number")
    if value.is_integer():
        return int(value)
    return value


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def decode_json(text: str) -> Any:
    """Strict JSON decode: NaN and Infinity are rejected, integral floats become ints.

    Raises ValueError (json.JSONDecodeError included) for anything that is not JSON.
    """
    return json.loads(text, parse_float=_parse_number, parse_constant=_reject_constant)
