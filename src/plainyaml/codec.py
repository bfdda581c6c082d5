"""Decode / encode facade: wires tokenizer, tree builder and serializer."""

from __future__ import annotations

import logging
from typing import Any

from .builder import build
from .errors import ParseError
from .line import tokenize
from .model import Value, from_python, to_python
from .options import DEFAULT_OPTIONS, Options
from .serializer import serialize

LOGGER = logging.getLogger(__name__)


def decode(source: str | bytes, options: Options | None = None) -> Value:
    """Parse YAML *source* into a Value.

    Bytes are decoded with ``options.encoding`` (UTF-8 when unset).
    """
    options = options or DEFAULT_OPTIONS
    if isinstance(source, bytes):
        try:
            source = source.decode(options.text_encoding)
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"source is not valid {options.text_encoding}: {exc.reason}", line=1, raw=""
            ) from exc
    lines = tokenize(source, options)
    value = build(lines, options)
    LOGGER.debug("decoded %d lines into %s", len(lines), type(value).__name__)
    return value


def encode(value: Value, options: Options | None = None) -> str:
    """Render *value* as YAML text, banner included."""
    options = options or DEFAULT_OPTIONS
    text = serialize(value, options)
    LOGGER.debug("encoded %s into %d characters", type(value).__name__, len(text))
    return text


# ---------------------------------------------------------------------------
# Plain-Python conveniences
# ---------------------------------------------------------------------------

def loads(source: str | bytes, options: Options | None = None) -> Any:
    """Like ``decode`` but returns dicts, lists and Python scalars."""
    return to_python(decode(source, options))


def dumps(obj: Any, options: Options | None = None) -> str:
    """Like ``encode`` but accepts plain Python data."""
    return encode(from_python(obj), options)
