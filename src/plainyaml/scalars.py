"""Scalar coercion rules shared by the tree builder and the serializer."""

from __future__ import annotations

import math
import re

from .errors import SerializeError
from .model import Null, Scalar, Value, VBool, VFloat, VInt, VNull, VText
from .options import DEFAULT_OPTIONS, Options

_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$")
_SPECIAL_FLOATS = {
    ".inf": math.inf,
    "+.inf": math.inf,
    "-.inf": -math.inf,
    ".nan": math.nan,
}

# Text that the tokenizer or the tree builder would read as structure
_KEY_PREFIX_RE = re.compile(r"^[\w\-.]+:(\s|$)")
_BLOCK_INDICATOR_RE = re.compile(r"^[|>][-+]?$")


def unquote(token: str) -> str:
    """Remove one pair of matching surrounding quotes, if present."""
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        return token[1:-1]
    return token


# ---------------------------------------------------------------------------
# Decode direction
# ---------------------------------------------------------------------------

def coerce_scalar(token: str, options: Options = DEFAULT_OPTIONS) -> Scalar:
    """Map a raw scalar token to a typed value.

    - ``true`` / ``false`` (any case) → VBool, when booleans are evaluated
    - ``~`` or empty → Null, when nulls are evaluated
    - Integer literals → VInt, decimal / exponent literals → VFloat
    - Everything else → VText, with surrounding quotes removed
    """
    if options.evaluate_booleans:
        lowered = token.lower()
        if lowered == "true":
            return VBool(True)
        if lowered == "false":
            return VBool(False)
    if options.evaluate_nulls and token in ("~", ""):
        return Null
    if _INT_RE.match(token):
        return VInt(int(token))
    if _FLOAT_RE.match(token):
        return VFloat(float(token))
    if token.lower() in _SPECIAL_FLOATS:
        return VFloat(_SPECIAL_FLOATS[token.lower()])
    return VText(unquote(token))


# ---------------------------------------------------------------------------
# Encode direction
# ---------------------------------------------------------------------------

def render_float(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)


def needs_quotes(text: str) -> bool:
    """True when *text* written bare would not read back as the same string."""
    if text != text.strip() or not text:
        return True
    if coerce_scalar(text) != VText(text):
        return True
    if "#" in text or text[0] in ("'", '"'):
        return True
    if text == "-" or text.startswith("- "):
        return True
    return bool(_BLOCK_INDICATOR_RE.match(text) or _KEY_PREFIX_RE.match(text))


def quote(text: str) -> str:
    if '"' not in text:
        return f'"{text}"'
    if "'" in text and "#" in text:
        # the first inner quote would end the region and expose the '#'
        raise SerializeError(
            "string with both quote characters and '#' cannot be written inline"
        )
    return f"'{text}'"


def render_text(text: str) -> str:
    return quote(text) if needs_quotes(text) else text


def render_scalar(value: Value) -> str:
    """Canonical inline form of a scalar, read back unchanged by coerce_scalar."""
    if isinstance(value, VNull):
        return "~"
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VInt):
        return str(value.value)
    if isinstance(value, VFloat):
        return render_float(value.value)
    if isinstance(value, VText):
        return render_text(value.value)
    raise TypeError(f"not a scalar: {type(value).__name__}")
