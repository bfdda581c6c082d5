"""Structural tree builder: turns a sequence of ``Line`` tokens into a Value.

Indentation is the only nesting signal.  The builder keeps a stack of open
frames; each frame is one container under construction.  A frame opened by
``key:`` or a bare ``-`` is *pending* until the next line decides whether it
holds anything and, from that line's shape, whether it is a mapping or a
sequence.  Once decided, the shape is enforced for the rest of the frame.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from .errors import ParseError
from .line import Line, tokenize_line
from .model import Null, Value, VList, VMap, VText
from .options import DEFAULT_OPTIONS, Options
from .scalars import coerce_scalar

MAPPING = "mapping"
SEQUENCE = "sequence"

_BLOCK_RE = re.compile(r"^([|>])([-+]?)$")


# ---------------------------------------------------------------------------
# Builder state
# ---------------------------------------------------------------------------

@dataclass
class _Frame:
    owner_indent: int                 # column of the line that opened it; -1 for root
    indent: int | None = None         # entry column, fixed by the first entry
    kind: str | None = None
    entries: dict | list | None = None
    parent: _Frame | None = None
    slot: str | int | None = None     # key or index inside the parent


@dataclass
class _Block:
    style: str                        # "|" literal, ">" folded
    chomp: str                        # "" clip, "-" strip, "+" keep
    anchor: int
    frame: _Frame
    slot: str | int
    line: Line
    lines: list[Line] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def build(lines: Iterable[Line], options: Options = DEFAULT_OPTIONS) -> Value:
    """Build the document value from tokenized *lines*."""
    builder = TreeBuilder(options)
    for line in lines:
        builder.feed(line)
    return builder.finish()


class TreeBuilder:
    """Incremental builder; ``feed`` lines in order, then call ``finish``."""

    def __init__(self, options: Options = DEFAULT_OPTIONS) -> None:
        self.options = options
        self.root = _Frame(owner_indent=-1)
        self.stack: list[_Frame] = [self.root]
        self.block: _Block | None = None
        self.last_line: Line | None = None

    # -- Driving --------------------------------------------------------

    def feed(self, line: Line) -> None:
        self.last_line = line
        if self.block is not None:
            if line.is_blank or line.indent > self.block.anchor:
                self.block.lines.append(line)
                return
            self._finish_block()
        if line.is_blank or line.is_comment:
            return
        self._place(line)

    def finish(self) -> Value:
        if self.block is not None:
            self._finish_block(at_end=True)
        while len(self.stack) > 1:
            self._close()
        if self.root.kind is None:
            last = self.last_line
            raise ParseError(
                "empty document",
                line=last.num if last else 1,
                raw=last.raw if last else "",
            )
        return self._freeze(self.root)

    # -- Structure ------------------------------------------------------

    def _place(self, line: Line) -> None:
        if line.fault is not None:
            raise line.fault
        frame = self._frame_for(line)
        if line.is_sequence_entry:
            self._sequence_entry(frame, line)
        elif line.key is not None:
            self._mapping_entry(frame, line)
        else:
            raise ParseError("expected a key or sequence entry", line=line.num, raw=line.raw)

    def _frame_for(self, line: Line) -> _Frame:
        """Close finished frames and return the one *line* belongs to."""
        indent = line.indent
        while True:
            top = self.stack[-1]
            if top.indent is None:
                if indent > top.owner_indent or self._sequence_at_key_column(top, line):
                    top.indent = indent
                    return top
                # nothing nested under the key: it holds null
                self._close()
                continue
            if indent < top.indent:
                if top is self.root:
                    raise ParseError("unexpected indentation", line=line.num, raw=line.raw)
                self._close()
                continue
            if indent > top.indent:
                raise ParseError("unexpected indentation", line=line.num, raw=line.raw)
            if (
                top.kind == SEQUENCE
                and top.indent == top.owner_indent
                and not line.is_sequence_entry
            ):
                self._close()
                continue
            return top

    @staticmethod
    def _sequence_at_key_column(frame: _Frame, line: Line) -> bool:
        # key:
        # - item
        return (
            line.is_sequence_entry
            and line.indent == frame.owner_indent
            and frame.parent is not None
            and frame.parent.kind == MAPPING
        )

    def _claim(self, frame: _Frame, kind: str, line: Line) -> None:
        if frame.kind is None:
            frame.kind = kind
            frame.entries = {} if kind == MAPPING else []
        elif frame.kind != kind:
            raise ParseError("mixed mapping and sequence entries", line=line.num, raw=line.raw)

    def _mapping_entry(self, frame: _Frame, line: Line) -> None:
        self._claim(frame, MAPPING, line)
        if line.key in frame.entries:
            raise ParseError(f'duplicate key "{line.key}"', line=line.num, raw=line.raw)
        frame.entries[line.key] = None
        self._assign(frame, line.key, line.value, line, line.indent)

    def _sequence_entry(self, frame: _Frame, line: Line) -> None:
        self._claim(frame, SEQUENCE, line)
        frame.entries.append(None)
        slot = len(frame.entries) - 1
        rest = line.value[1:].lstrip()
        if rest:
            column = line.indent + len(line.value) - len(rest)
            nested = tokenize_line(" " * column + rest, line.num)
            if nested.key is not None or nested.is_sequence_entry:
                # compact form: "- key: value" / "- - value"
                nested.raw = line.raw
                self.stack.append(_Frame(
                    owner_indent=line.indent, indent=column, parent=frame, slot=slot,
                ))
                self._place(nested)
                return
        self._assign(frame, slot, rest or None, line, line.indent)

    def _assign(
        self, frame: _Frame, slot: str | int, text: str | None, line: Line, column: int,
    ) -> None:
        if text is None:
            self.stack.append(_Frame(owner_indent=column, parent=frame, slot=slot))
            return
        m = _BLOCK_RE.match(text)
        if m:
            self.block = _Block(
                style=m.group(1), chomp=m.group(2), anchor=column,
                frame=frame, slot=slot, line=line,
            )
            return
        frame.entries[slot] = coerce_scalar(text, self.options)

    def _close(self) -> None:
        frame = self.stack.pop()
        frame.parent.entries[frame.slot] = self._freeze(frame)

    def _freeze(self, frame: _Frame) -> Value:
        if frame.kind == MAPPING:
            return VMap(frame.entries)
        if frame.kind == SEQUENCE:
            return VList(frame.entries)
        return Null if self.options.evaluate_nulls else VText("")

    # -- Block scalars --------------------------------------------------

    def _finish_block(self, at_end: bool = False) -> None:
        block, self.block = self.block, None
        body = list(block.lines)
        trailing = 0
        while body and body[-1].is_blank:
            body.pop()
            trailing += 1
        if not body:
            if at_end:
                raise ParseError(
                    "unterminated block scalar", line=block.line.num, raw=block.line.raw
                )
            # indicator directly followed by a sibling
            block.frame.entries[block.slot] = VText("")
            return

        margin = min(line.indent for line in body if not line.is_blank)
        rows = [line.raw[margin:] for line in body]
        eol = self.options.eol
        if block.style == "|":
            text = eol.join(rows)
            if block.chomp == "":
                text += eol
        else:
            text = _fold(rows, eol)
        if block.chomp == "+":
            text += eol * (trailing + 1)
        block.frame.entries[block.slot] = VText(text)


def _fold(rows: list[str], eol: str) -> str:
    """Join folded rows with spaces; each blank row becomes a line break."""
    text = ""
    breaks = 0
    started = False
    for row in rows:
        if not row.strip():
            breaks += 1
            continue
        if not started:
            text = row
            started = True
        elif breaks:
            text += eol * breaks + row
        else:
            text += " " + row
        breaks = 0
    return text
