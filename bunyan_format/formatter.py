"""Render decoded bunyan records as text.

Human-readable layout (short/long):

    [time] LEVEL: name[/comp]/pid on hostname (src): msg* (extras...)
      msg*
      --
      long and multi-line extras
      ...

A single-line 'msg' goes in the top line, 'req'/'res' and friends become
indented blocks, 'err.stack' is shown verbatim, and every field not consumed
along the way is rendered as an extra or a detail.
"""

import json
import pprint
from typing import Any, Callable, Mapping

from bunyan_format.colors import get_stylizer
from bunyan_format.config import FormatConfig, OutputMode, config_from_options
from bunyan_format.http_blocks import format_client_request, format_request, format_response
from bunyan_format.levels import level_label, level_to_name, lookup_level
from bunyan_format.text import indent, is_present, pretty_json, to_text

REQUIRED_FIELDS = ("v", "level", "name", "hostname", "pid", "time", "msg")

# Used by short/long when the configuration carries no level->color map.
# Differs from config.DEFAULT_COLOR_FROM_LEVEL, which the stream sink applies.
RENDERER_COLOR_FROM_LEVEL = {
    10: "brightCyan",     # TRACE
    20: "brightYellow",   # DEBUG
    30: "cyan",           # INFO
    40: "brightMagenta",  # WARN
    50: "red",            # ERROR
    60: "inverse",        # FATAL
}

# Leftover string values longer than this go into the details section
MAX_EXTRA_LENGTH = 50

# Wider json_indent values are clamped to this width
MAX_JSON_INDENT = 10


def is_valid_record(record: Mapping) -> bool:
    """True when all the fields the line-oriented modes need are non-null."""
    return all(record.get(field) is not None for field in REQUIRED_FIELDS)


def _fallback_line(record: Mapping, raw_line: str | None) -> str:
    line = record.get("line")
    if line is None:
        line = raw_line or ""
    return to_text(line) + "\n"


def _promote(rec: dict, prefix: str, rest: dict):
    # May overwrite a literal '<prefix>.<key>' field already in the record
    for key, value in rest.items():
        rec[f"{prefix}.{key}"] = value


def _render_human(record: Mapping, config: FormatConfig, raw_line: str | None,
                  short: bool) -> str:
    if not is_valid_record(record):
        return _fallback_line(record, raw_line)

    stylize = get_stylizer(config.color)
    rec = dict(record)
    del rec["v"]

    # ISO 8601 dates can safely lose their date part in short mode
    time_str = to_text(rec.pop("time"))
    if short and time_str[10:11] == "T":
        time_str = stylize(time_str[11:], config.time_color)
    else:
        time_str = stylize(f"[{time_str}]", config.time_color)

    name = to_text(rec.pop("name"))
    component = rec.pop("component", None)
    if is_present(component):
        name += "/" + to_text(component)
    pid = rec.pop("pid")
    if not short:
        name += "/" + to_text(pid)

    level_value = rec.pop("level")
    level = level_label(level_value)
    if config.color:
        colors = config.color_from_level
        if colors is None:
            colors = RENDERER_COLOR_FROM_LEVEL
        level = stylize(level, lookup_level(colors, level_value))

    src = ""
    source = rec.pop("src", None)
    if isinstance(source, dict) and is_present(source.get("file")):
        location = f"{to_text(source['file'])}:{to_text(source.get('line'))}"
        if is_present(source.get("func")):
            location += f" in {to_text(source['func'])}"
        src = stylize(f" ({location})", "green")

    hostname = rec.pop("hostname")

    extras: list[str] = []
    details: list[str] = []

    req_id = rec.pop("req_id", None)
    if is_present(req_id):
        extras.append(f"req_id={to_text(req_id)}")

    msg = to_text(rec.pop("msg"))
    if "\n" in msg:
        oneline_msg = ""
        details.append(indent(stylize(msg, config.msg_color)))
    else:
        oneline_msg = " " + stylize(msg, config.msg_color)

    if isinstance(rec.get("req"), dict):
        block, rest = format_request(rec.pop("req"))
        details.append(indent(block))
        _promote(rec, "req", rest)

    if isinstance(rec.get("client_req"), dict):
        block, rest = format_client_request(rec.pop("client_req"))
        _promote(rec, "client_req", rest)
        details.append(indent(block))

    for key in ("res", "client_res"):
        if isinstance(rec.get(key), dict):
            block, rest = format_response(rec.pop(key))
            if block:
                details.append(indent(block))
            _promote(rec, "res", rest)

    err = rec.get("err")
    if isinstance(err, dict) and is_present(err.get("stack")):
        details.append(indent(to_text(err["stack"])))
        del rec["err"]

    for key, value in rec.items():
        stringified = not isinstance(value, str)
        if stringified:
            value = pretty_json(value)
        if "\n" in value or len(value) > MAX_EXTRA_LENGTH:
            details.append(indent(f"{key}: {value}"))
        elif not stringified and (" " in value or not value):
            extras.append(f"{key}={json.dumps(value, ensure_ascii=False)}")
        else:
            extras.append(f"{key}={value}")

    extras_str = stylize(
        f" ({', '.join(extras)})" if extras else "", config.extra_color
    )
    details_str = stylize(
        "\n  --\n".join(details) + "\n" if details else "", config.meta_color
    )

    if short:
        return f"{time_str} {level} {name}:{oneline_msg}{extras_str}\n{details_str}"
    host = to_text(hostname) if hostname else "<no-hostname>"
    return (
        f"{time_str} {level}: {name} on {host}{src}:{oneline_msg}{extras_str}\n"
        f"{details_str}"
    )


def _render_short(record, config, raw_line):
    return _render_human(record, config, raw_line, short=True)


def _render_long(record, config, raw_line):
    return _render_human(record, config, raw_line, short=False)


def _render_inspect(record, config, raw_line):
    return pprint.pformat(record, sort_dicts=False) + "\n"


def _with_level_name(record: Mapping, config: FormatConfig) -> dict:
    rec = dict(record)
    if config.level_in_string and "level" in rec:
        rec["level"] = level_to_name(rec["level"])
    return rec


def _dump_json(rec: dict, indent_width: int) -> str:
    if indent_width:
        return json.dumps(rec, indent=min(indent_width, MAX_JSON_INDENT),
                          ensure_ascii=False, allow_nan=False)
    return json.dumps(rec, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _render_bunyan(record, config, raw_line):
    return _dump_json(_with_level_name(record, config), 0) + "\n"


def _render_json(record, config, raw_line):
    return _dump_json(_with_level_name(record, config), config.json_indent) + "\n"


def _render_simple(record, config, raw_line):
    # log4j SimpleLayout
    if not is_valid_record(record):
        return _fallback_line(record, raw_line)
    return f"{level_label(record['level'], padded=False)} - {to_text(record['msg'])}\n"


_RENDERERS: dict[OutputMode, Callable[[Mapping, FormatConfig, str | None], str]] = {
    OutputMode.SHORT: _render_short,
    OutputMode.LONG: _render_long,
    OutputMode.INSPECT: _render_inspect,
    OutputMode.BUNYAN: _render_bunyan,
    OutputMode.JSON: _render_json,
    OutputMode.SIMPLE: _render_simple,
}


def render(record: Mapping[str, Any],
           config: FormatConfig | Mapping[str, Any] | None = None,
           raw_line: str | None = None) -> str:
    """Render one decoded record according to config.output_mode.

    config may be a FormatConfig, a plain option mapping, or None for the
    defaults; a mapping naming an unknown output mode raises ConfigError.
    raw_line is printed when an invalid record has no 'line' field of its own.
    The record itself is never modified.
    """
    if not isinstance(config, FormatConfig):
        config = config_from_options(config)
    return _RENDERERS[config.output_mode](record, config, raw_line)
