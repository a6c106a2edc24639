"""Formatter configuration: output modes, colors, and option loading.

Sources are layered defaults <- YAML file <- environment variables.
"""

import logging
import os
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when formatter options cannot produce a usable configuration."""


class OutputMode(Enum):
    LONG = 1
    JSON = 2
    INSPECT = 3
    SIMPLE = 4
    SHORT = 5
    BUNYAN = 6

    @classmethod
    def parse(cls, value: Any) -> "OutputMode":
        """Resolve a mode from an OutputMode, its lowercase name, or its code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            name = value.strip()
            if name.isdigit():
                return cls.parse(int(name))
            mode = _MODE_FROM_NAME.get(name)
            if mode is not None:
                return mode
        raise ConfigError(f"unknown output mode: {value}")


_MODE_FROM_NAME = {mode.name.lower(): mode for mode in OutputMode}

DEFAULT_COLOR_FROM_LEVEL = MappingProxyType({
    10: "brightBlack",    # TRACE
    20: "brightYellow",   # DEBUG
    30: "brightGreen",    # INFO
    40: "brightMagenta",  # WARN
    50: "red",            # ERROR
    60: "brightRed",      # FATAL
})


def _normalize_level_colors(mapping: Mapping) -> MappingProxyType:
    normalized = {}
    for level, color in mapping.items():
        try:
            normalized[int(level)] = str(color)
        except (TypeError, ValueError):
            raise ConfigError(f"invalid level in color map: {level!r}") from None
    return MappingProxyType(normalized)


@dataclass(frozen=True)
class FormatConfig:
    output_mode: OutputMode = OutputMode.SHORT
    color: bool = True
    msg_color: str = "cyan"
    time_color: str = "brightWhite"
    meta_color: str = "brightRed"
    extra_color: str = "brightCyan"
    color_from_level: Mapping[int, str] | None = None
    level_in_string: bool = False
    json_indent: int = 0

    def __post_init__(self):
        object.__setattr__(self, "output_mode", OutputMode.parse(self.output_mode))
        if self.color_from_level is not None:
            object.__setattr__(
                self, "color_from_level", _normalize_level_colors(self.color_from_level)
            )
        if (
            not isinstance(self.json_indent, int)
            or isinstance(self.json_indent, bool)
            or self.json_indent < 0
        ):
            raise ConfigError(f"json_indent must be a non-negative integer, got {self.json_indent!r}")


_FIELD_NAMES = frozenset(f.name for f in fields(FormatConfig))

# Option names accepted from plain mappings, e.g. YAML files or stream options
OPTION_ALIASES = {
    "outputMode": "output_mode",
    "msgColor": "msg_color",
    "timeColor": "time_color",
    "metaColor": "meta_color",
    "extraColor": "extra_color",
    "colorFromLevel": "color_from_level",
    "levelInString": "level_in_string",
    "jsonIndent": "json_indent",
}


def config_from_options(options: Mapping[str, Any] | None = None) -> FormatConfig:
    """Build a FormatConfig from a mapping of camelCase or snake_case options."""
    kwargs = {}
    for key, value in (options or {}).items():
        field_name = OPTION_ALIASES.get(key, key)
        if field_name not in _FIELD_NAMES:
            logger.warning("Ignoring unknown formatter option '%s'", key)
            continue
        kwargs[field_name] = value
    return FormatConfig(**kwargs)


def read_config_file(path: str) -> dict:
    """Read formatter options from a YAML file. Missing or invalid files yield {}."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError:
        logger.warning("Invalid YAML in %s, using defaults", path)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s does not contain a mapping, using defaults", path)
        return {}
    return data


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_level_colors(value: str) -> dict[int, str] | None:
    """Parse '10:brightBlack,30:green' into a level->color dict."""
    try:
        colors = {}
        for pair in value.split(","):
            level, color = pair.split(":")
            colors[int(level.strip())] = color.strip()
        return colors
    except ValueError:
        logger.warning("Invalid BUNYAN_COLOR_FROM_LEVEL format, using defaults")
        return None


def load_config(config_path: str | None = None) -> FormatConfig:
    """Build FormatConfig from defaults <- YAML file <- environment variables."""
    options: dict[str, Any] = {}
    if config_path is not None:
        options.update(read_config_file(config_path))

    env = os.environ
    if "BUNYAN_OUTPUT_MODE" in env:
        options["output_mode"] = env["BUNYAN_OUTPUT_MODE"].strip()
    if "BUNYAN_COLOR" in env:
        options["color"] = _parse_bool(env["BUNYAN_COLOR"])
    for var, field_name in (
        ("BUNYAN_MSG_COLOR", "msg_color"),
        ("BUNYAN_TIME_COLOR", "time_color"),
        ("BUNYAN_META_COLOR", "meta_color"),
        ("BUNYAN_EXTRA_COLOR", "extra_color"),
    ):
        if var in env:
            options[field_name] = env[var].strip()
    if "BUNYAN_COLOR_FROM_LEVEL" in env:
        colors = _parse_level_colors(env["BUNYAN_COLOR_FROM_LEVEL"])
        if colors is not None:
            options["color_from_level"] = colors
    if "BUNYAN_LEVEL_IN_STRING" in env:
        options["level_in_string"] = _parse_bool(env["BUNYAN_LEVEL_IN_STRING"])
    if "BUNYAN_JSON_INDENT" in env:
        try:
            options["json_indent"] = int(env["BUNYAN_JSON_INDENT"])
        except ValueError:
            raise ConfigError(
                f"BUNYAN_JSON_INDENT must be an integer, got {env['BUNYAN_JSON_INDENT']!r}"
            ) from None

    return config_from_options(options)
