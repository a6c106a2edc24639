"""Writable sink that formats NDJSON bunyan records as they are written."""

import logging
import sys
import threading
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, TextIO

from bunyan_format.config import DEFAULT_COLOR_FROM_LEVEL, FormatConfig, config_from_options
from bunyan_format.formatter import render
from bunyan_format.text import decode_json

logger = logging.getLogger(__name__)


@dataclass
class SinkStats:
    formatted: int = 0
    passed_through: int = 0
    render_errors: int = 0


class FormatWriter:
    """Accepts one JSON record per chunk and writes the rendered text to out.

    Chunks that are not JSON objects are written through unchanged, so no
    input line is ever dropped.
    """

    def __init__(self, config: FormatConfig | None = None, out: TextIO | None = None):
        config = config or FormatConfig()
        if config.color_from_level is None:
            config = replace(config, color_from_level=DEFAULT_COLOR_FROM_LEVEL)
        self.config = config
        self._out = out if out is not None else sys.stdout
        self._lock = threading.Lock()
        self._stats = SinkStats()

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None,
                     out: TextIO | None = None) -> "FormatWriter":
        return cls(config_from_options(options), out)

    @property
    def stats(self) -> SinkStats:
        return replace(self._stats)

    def _format(self, text: str) -> str:
        try:
            record = decode_json(text)
        except ValueError:
            logger.debug("Passing through non-JSON chunk (%d chars)", len(text))
            self._stats.passed_through += 1
            return text

        if not isinstance(record, dict):
            logger.debug("Passing through JSON %s, expected an object", type(record).__name__)
            self._stats.passed_through += 1
            return text

        try:
            output = render(record, self.config, raw_line=text.rstrip("\r\n"))
        except Exception:
            logger.exception("Failed to format record, passing chunk through")
            self._stats.render_errors += 1
            return text

        self._stats.formatted += 1
        return output

    def write(self, chunk: bytes | str) -> None:
        """Format one chunk and write the result to the downstream sink."""
        if isinstance(chunk, (bytes, bytearray)):
            text = bytes(chunk).decode("utf-8", errors="replace")
        else:
            text = chunk

        with self._lock:
            self._out.write(self._format(text))

    def writelines(self, chunks: Iterable[bytes | str]) -> None:
        for chunk in chunks:
            self.write(chunk)

    def flush(self) -> None:
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()
