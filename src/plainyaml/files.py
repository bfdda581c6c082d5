"""File layer: validates YAML paths, reads and writes them through the codec."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from .codec import decode, encode
from .errors import FileError, ParseError
from .model import Value
from .options import DEFAULT_OPTIONS, Options

LOGGER = logging.getLogger(__name__)

_YAML_NAME_RE = re.compile(r"[\w\-]+\.(yaml|yml)$")


def _check_name(path: Path) -> None:
    if not _YAML_NAME_RE.search(path.name):
        raise FileError(f'"{path.name}" is not a YAML file')


def resolve_yaml_path(path: str | os.PathLike) -> Path:
    """Return the absolute path of an existing, readable ``.yaml``/``.yml`` file."""
    candidate = Path(path)
    if not candidate.is_file():
        raise FileError(f'YAML file "{candidate.name}" does not exist')
    real = candidate.resolve()
    _check_name(real)
    if not os.access(real, os.R_OK):
        raise FileError(f'YAML file "{real.name}" is not readable')
    return real


def parse_file(path: str | os.PathLike, options: Options | None = None) -> Value:
    """Read and decode a YAML file.

    Parse errors are re-raised with the file name attached, keeping the
    original error class, line number and line content.
    """
    options = options or DEFAULT_OPTIONS
    real = resolve_yaml_path(path)
    try:
        data = real.read_bytes()
    except OSError as exc:
        raise FileError(f'failed to read YAML file "{real.name}": {exc}') from exc
    if not data:
        raise FileError(f'YAML file "{real.name}" is blank')

    try:
        value = decode(data, options)
    except ParseError as exc:
        raise type(exc)(exc.reason, line=exc.line, raw=exc.raw, source=real.name) from exc
    LOGGER.debug("parsed %s", real)
    return value


def compile_file(
    value: Value, path: str | os.PathLike, options: Options | None = None
) -> Path:
    """Encode *value* and write it to *path*; returns the written path."""
    options = options or DEFAULT_OPTIONS
    target = Path(path)
    _check_name(target)
    text = encode(value, options)
    try:
        # newline="" keeps the configured end-of-line untouched
        with open(target, "w", encoding=options.text_encoding, newline="") as fh:
            fh.write(text)
    except OSError as exc:
        raise FileError(f'failed to write YAML file "{target.name}": {exc}') from exc
    LOGGER.debug("wrote %d characters to %s", len(text), target)
    return target
