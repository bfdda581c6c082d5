"""Line tokenizer: classifies one raw source line into a ``Line`` token."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import MalformedLine
from .options import Options

_KEY_RE = re.compile(r"^([\w\-.]+):(?=\s|$)")
_QUOTES = ("'", '"')


@dataclass(slots=True)
class Line:
    raw: str
    num: int
    length: int
    indent: int
    key: str | None = None
    value: str | None = None  # None = nothing after the key / dash
    is_blank: bool = False
    is_comment: bool = False
    # raised by the tree builder unless the line is block scalar content
    fault: MalformedLine | None = None

    @property
    def is_sequence_entry(self) -> bool:
        """``- item`` or a lone ``-``."""
        return self.key is None and self.value is not None and (
            self.value == "-" or self.value.startswith("- ")
        )


# ---------------------------------------------------------------------------
# Comment stripping
# ---------------------------------------------------------------------------

def strip_comment(text: str, num: int = 0, raw: str | None = None) -> str:
    """Cut *text* at the first ``#`` that is not inside a quoted region.

    A region opens on ``'`` or ``"`` at the start of the text or after
    whitespace, and closes on the next occurrence of the same character.
    """
    quote: str | None = None
    hash_in_quote = False
    for idx, ch in enumerate(text):
        if quote is not None:
            if ch == quote:
                quote = None
                hash_in_quote = False
            elif ch == "#":
                hash_in_quote = True
            continue
        if ch in _QUOTES and (idx == 0 or text[idx - 1].isspace()):
            quote = ch
            continue
        if ch == "#":
            return text[:idx]
    if quote is not None and hash_in_quote:
        raise MalformedLine(
            "unterminated quote", line=num, raw=text if raw is None else raw
        )
    return text


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def measure_indent(raw: str) -> int:
    return len(raw) - len(raw.lstrip())


def tokenize_line(raw: str, num: int) -> Line:
    """Tokenize a single physical line (*num* is 1-based)."""
    if raw.startswith("\t"):
        raise MalformedLine("line cannot be indented by a tab character", line=num, raw=raw)

    line = Line(raw=raw, num=num, length=len(raw), indent=measure_indent(raw))

    if not raw.strip():
        line.is_blank = True
        return line
    if raw.lstrip().startswith("#"):
        line.is_comment = True
        return line

    text = raw.strip()
    try:
        text = strip_comment(text, num, raw).strip()
    except MalformedLine as exc:
        line.fault = exc

    m = _KEY_RE.match(text)
    if m:
        line.key = m.group(1)
        line.value = text[m.end():].strip() or None
    else:
        line.value = text or None
    return line


def tokenize(text: str, options: Options) -> list[Line]:
    """Split *text* on the configured end-of-line and tokenize every line.

    A final end-of-line terminates the last line; it does not open a new one.
    """
    raws = text.split(options.eol)
    if len(raws) > 1 and raws[-1] == "":
        raws.pop()
    return [tokenize_line(raw, num) for num, raw in enumerate(raws, start=1)]
