"""Data model for plainyaml values, plus the plain-Python boundary adapters."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import StructureError


# ---------------------------------------------------------------------------
# Null singleton for ``~``
# ---------------------------------------------------------------------------

class VNull:
    """The null scalar.  There is exactly one instance, ``Null``."""

    _instance: VNull | None = None

    __slots__ = ()

    def __new__(cls) -> VNull:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = VNull()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VBool:
    value: bool


@dataclass(frozen=True, slots=True)
class VInt:
    value: int


@dataclass(frozen=True, slots=True)
class VFloat:
    value: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VFloat):
            return NotImplemented
        # nan never equals itself, which would break round-trip checks
        if math.isnan(self.value) and math.isnan(other.value):
            return True
        return self.value == other.value

    def __hash__(self) -> int:
        if math.isnan(self.value):
            return hash(("VFloat", "nan"))
        return hash(("VFloat", self.value))


@dataclass(frozen=True, slots=True)
class VText:
    value: str


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VList:
    items: list[Value]


@dataclass(frozen=True, slots=True)
class VMap:
    entries: dict[str, Value]  # insertion order is document order


Scalar = Union[VNull, VBool, VInt, VFloat, VText]
Value = Union[VNull, VBool, VInt, VFloat, VText, VList, VMap]

SCALAR_TYPES = (VNull, VBool, VInt, VFloat, VText)
CONTAINER_TYPES = (VList, VMap)


def is_scalar(value: Value) -> bool:
    return isinstance(value, SCALAR_TYPES)


# ---------------------------------------------------------------------------
# Boundary adapters
# ---------------------------------------------------------------------------

def from_python(obj: Any) -> Value:
    """Convert plain Python data into a Value tree.

    Accepts ``None``, ``bool``, ``int``, ``float``, ``str``, mappings,
    lists/tuples, dataclass instances and objects with public attributes.
    Mapping keys must be strings at every level.  Values already in the
    union are passed through untouched.
    """
    if obj is None:
        return Null
    if isinstance(obj, SCALAR_TYPES + CONTAINER_TYPES):
        return obj
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, int):
        return VInt(obj)
    if isinstance(obj, float):
        return VFloat(obj)
    if isinstance(obj, str):
        return VText(obj)
    if isinstance(obj, Mapping):
        return VMap(_convert_entries(obj.items()))
    if isinstance(obj, (list, tuple)):
        return VList([from_python(item) for item in obj])
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return VMap(_convert_entries(dataclasses.asdict(obj).items()))
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        public = {k: v for k, v in vars(obj).items() if not k.startswith("_")}
        return VMap(_convert_entries(public.items()))
    raise StructureError(f"unsupported value type {type(obj).__name__}")


def _convert_entries(items) -> dict[str, Value]:
    entries: dict[str, Value] = {}
    for key, item in items:
        if not isinstance(key, str):
            raise StructureError(
                f"mapping keys must be strings, got {type(key).__name__} {key!r}",
                key=str(key),
            )
        entries[key] = from_python(item)
    return entries


def to_python(value: Value) -> Any:
    """Convert a Value tree back into dicts, lists and Python scalars."""
    if isinstance(value, VNull):
        return None
    if isinstance(value, (VBool, VInt, VFloat, VText)):
        return value.value
    if isinstance(value, VList):
        return [to_python(item) for item in value.items]
    if isinstance(value, VMap):
        return {key: to_python(item) for key, item in value.entries.items()}
    raise StructureError(f"not a plainyaml value: {type(value).__name__}")
