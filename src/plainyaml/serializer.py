"""Recursive serializer: renders a Value tree as block-style YAML text."""

from __future__ import annotations

import re

from .errors import SerializeError, StructureError
from .model import Value, VList, VMap, VText, is_scalar
from .options import DEFAULT_OPTIONS, Options
from .scalars import render_scalar

BANNER = (
    "# This YAML file has been compiled using plainyaml",
    "# https://pypi.org/project/plainyaml/",
)

FOLD_WIDTH = 75

_KEY_RE = re.compile(r"^[\w\-.]+$")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def serialize(value: Value, options: Options = DEFAULT_OPTIONS) -> str:
    """Render *value* (a VMap or VList) with the two-line banner on top."""
    if not isinstance(value, (VMap, VList)):
        raise StructureError(
            f"document root must be a mapping or sequence, got {type(value).__name__}"
        )
    eol = options.eol
    body = _Compiler(options).compile(value, None, 0)
    return eol.join(BANNER) + eol * 2 + eol.join(body) + eol


class _Compiler:
    def __init__(self, options: Options) -> None:
        self.options = options
        self.eol = options.eol

    def compile(self, value: VMap | VList, parent: str | None, tier: int) -> list[str]:
        """Lines for one container level at *tier*."""
        indent = " " * (self.options.indent * tier)
        out: list[str] = []
        after_container = False

        for label, item in self._entries(value):
            prefix = f"{indent}{label}:" if isinstance(value, VMap) else f"{indent}-"

            if is_scalar(item):
                # separate from the preceding block, unless a kept block
                # scalar already ended in blank lines
                if after_container and out and out[-1] != "":
                    out.append("")
                after_container = False
                out.extend(self._scalar_lines(prefix, item, indent))
            elif isinstance(item, (VMap, VList)):
                after_container = True
                out.append(prefix)
                out.extend(self.compile(item, label, tier + 1))
            else:
                raise StructureError(f"unsupported value type {type(item).__name__}", key=label)

        if not "".join(out).strip():
            name = "(root)" if parent is None else parent
            raise SerializeError(f'empty or all-whitespace result for key "{name}"', key=parent)
        return out

    def _entries(self, value: VMap | VList):
        if isinstance(value, VList):
            for index, item in enumerate(value.items):
                yield str(index), item
            return
        for key, item in value.entries.items():
            if not isinstance(key, str):
                raise StructureError(
                    f"mapping keys must be strings, got {type(key).__name__} {key!r}",
                    key=str(key),
                )
            if not _KEY_RE.match(key):
                raise StructureError(f'key "{key}" cannot be written as a plain key', key=key)
            yield key, item

    # -- Scalars --------------------------------------------------------

    def _scalar_lines(self, prefix: str, item: Value, indent: str) -> list[str]:
        if not isinstance(item, VText):
            return [f"{prefix} {render_scalar(item)}"]

        text = item.value
        sub = indent + " " * self.options.indent
        if self.eol in text:
            return self._literal(prefix, text, sub)
        if len(text) > FOLD_WIDTH and _foldable(text):
            return [f"{prefix} >"] + [sub + row for row in wordwrap(text, FOLD_WIDTH)]
        return [f"{prefix} {render_scalar(item)}"]

    def _literal(self, prefix: str, text: str, sub: str) -> list[str]:
        rows = text.split(self.eol)
        trailing = 0
        while rows and rows[-1] == "":
            rows.pop()
            trailing += 1
        if not any(row.strip() for row in rows):
            raise StructureError("string made only of line breaks cannot be written as a block")
        if all(row[:1].isspace() for row in rows if row):
            raise StructureError("block scalar lines cannot all start with whitespace")
        if rows[-1].isspace():
            # read back as a trailing blank line and dropped
            raise StructureError("block scalar cannot end in a whitespace-only line")
        chomp = "-" if trailing == 0 else "" if trailing == 1 else "+"
        out = [f"{prefix} |{chomp}"]
        out.extend(sub + row if row else "" for row in rows)
        out.extend("" for _ in range(trailing - 1))
        return out


# ---------------------------------------------------------------------------
# Folding helpers
# ---------------------------------------------------------------------------

def _foldable(text: str) -> bool:
    """True when folding at single spaces and re-joining gives *text* back."""
    if text != text.strip() or "  " in text:
        return False
    return all(ch == " " or not ch.isspace() for ch in text)


def wordwrap(text: str, width: int = FOLD_WIDTH) -> list[str]:
    """Greedy wrap at single spaces; words longer than *width* stay whole."""
    rows: list[str] = []
    current = ""
    for word in text.split(" "):
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= width:
            current += " " + word
        else:
            rows.append(current)
            current = word
    rows.append(current)
    return rows
