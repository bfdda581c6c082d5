"""plainyaml: block-style YAML subset decoder and encoder."""

from .codec import decode, dumps, encode, loads
from .errors import (
    FileError,
    MalformedLine,
    OptionsError,
    ParseError,
    PlainYamlError,
    SerializeError,
    StructureError,
)
from .files import compile_file, parse_file
from .model import (
    Null,
    Value,
    VBool,
    VFloat,
    VInt,
    VList,
    VMap,
    VNull,
    VText,
    from_python,
    to_python,
)
from .options import Options

__version__ = "0.1.0"

__all__ = [
    "decode",
    "encode",
    "loads",
    "dumps",
    "parse_file",
    "compile_file",
    "from_python",
    "to_python",
    "Options",
    "Null",
    "Value",
    "VBool",
    "VFloat",
    "VInt",
    "VList",
    "VMap",
    "VNull",
    "VText",
    "PlainYamlError",
    "ParseError",
    "MalformedLine",
    "SerializeError",
    "StructureError",
    "OptionsError",
    "FileError",
]
