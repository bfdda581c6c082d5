"""Immutable run configuration shared by the decoder and the encoder."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from .errors import OptionsError

MIN_INDENT = 2
MAX_INDENT = 8
EOL_CHOICES = ("\n", "\r\n")


@dataclass(frozen=True)
class Options:
    """Options for one decode or encode run.

    ``indent`` is only consulted when encoding; the decoder takes nesting
    from whatever indentation the text uses.  ``encoding`` names the codec
    used when ``decode`` is handed bytes.
    """

    indent: int = 2
    eol: str = os.linesep
    evaluate_booleans: bool = True
    evaluate_nulls: bool = True
    encoding: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise OptionsError(f"indent must be an integer, got {self.indent!r}")
        if not MIN_INDENT <= self.indent <= MAX_INDENT:
            raise OptionsError(
                f"indent must be between {MIN_INDENT} and {MAX_INDENT}, got {self.indent}"
            )
        if self.eol not in EOL_CHOICES:
            raise OptionsError(f"invalid end-of-line sequence {self.eol!r}")
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError as exc:
                raise OptionsError(f"unknown text encoding {self.encoding!r}") from exc

    @property
    def text_encoding(self) -> str:
        return self.encoding or "utf-8"


DEFAULT_OPTIONS = Options()
