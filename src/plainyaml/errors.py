"""Exception hierarchy for plainyaml."""

from __future__ import annotations


class PlainYamlError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Decode side
# ---------------------------------------------------------------------------

class ParseError(PlainYamlError):
    """Decoding failed; always attributable to one input line.

    ``source`` is filled in by the file layer when the text came from disk.
    """

    def __init__(
        self,
        reason: str,
        line: int | None = None,
        raw: str | None = None,
        source: str | None = None,
    ) -> None:
        self.reason = reason
        self.line = line
        self.raw = raw
        self.source = source
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = self.reason
        if self.source is not None:
            text += f' in file "{self.source}"'
        if self.line is not None:
            text += f" on line {self.line}"
        return text


class MalformedLine(ParseError):
    """A single line cannot be tokenized (tab indentation, open quote)."""


# ---------------------------------------------------------------------------
# Encode side
# ---------------------------------------------------------------------------

class SerializeError(PlainYamlError):
    """Encoding failed."""

    def __init__(self, reason: str, key: str | None = None) -> None:
        self.reason = reason
        self.key = key
        super().__init__(reason)


class StructureError(SerializeError):
    """The value's shape cannot be expressed in the dialect."""


# ---------------------------------------------------------------------------
# Configuration / collaborators
# ---------------------------------------------------------------------------

class OptionsError(PlainYamlError, ValueError):
    """Invalid option value, raised when the Options object is built."""


class FileError(PlainYamlError, OSError):
    """A YAML file could not be located, validated, read or written."""
