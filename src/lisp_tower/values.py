"""Tagged runtime values consumed and produced by the primitives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

import jax.numpy as jnp

from .errors import WrongTypeArgument

# Eight bits of a 64-bit word are reserved for the tag.
MAX_FIXNUM: Final[int] = (2**63 - 1) >> 8
MIN_FIXNUM: Final[int] = -(2**63) >> 8


def fixnum_in_range(value: int) -> bool:
    return MIN_FIXNUM <= value <= MAX_FIXNUM


@dataclass(frozen=True)
class Symbol:
    name: str


NIL: Final = None
T: Final = Symbol("t")


@dataclass(frozen=True)
class LispFloat:
    """Boxed double."""

    value: float


@dataclass(frozen=True)
class LispBignum:
    """Boxed arbitrary-precision integer."""

    value: int


@dataclass(frozen=True, eq=False)
class LispString:
    """String object backed by a flat ``uint8`` buffer.

    ``multibyte`` strings hold UTF-8 encoded scalars, unibyte strings hold raw
    bytes. The layout is fixed when the string is built.
    """

    data: jnp.ndarray
    multibyte: bool

    def __post_init__(self) -> None:
        if self.data.ndim != 1 or self.data.dtype != jnp.dtype(jnp.uint8):
            raise ValueError("LispString data must be a rank-1 uint8 buffer")

    @classmethod
    def from_text(cls, text: str) -> "LispString":
        return cls(data=jnp.asarray(list(text.encode("utf-8")), dtype=jnp.uint8), multibyte=True)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "LispString":
        return cls(data=jnp.asarray(list(raw), dtype=jnp.uint8), multibyte=False)

    @property
    def nbytes(self) -> int:
        return int(self.data.shape[0])

    def tolist(self) -> list[int]:
        return [int(b) for b in self.data.tolist()]

    def to_bytes(self) -> bytes:
        return bytes(self.tolist())

    def text(self) -> str:
        raw = self.to_bytes()
        if self.multibyte:
            return raw.decode("utf-8")
        return raw.decode("latin-1")

    def __len__(self) -> int:
        if self.multibyte:
            return len(self.text())
        return self.nbytes

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LispString):
            return self.multibyte == other.multibyte and self.tolist() == other.tolist()
        if isinstance(other, str):
            return self.multibyte and self.text() == other
        if isinstance(other, (bytes, bytearray)):
            return not self.multibyte and self.to_bytes() == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.multibyte, self.to_bytes()))

    def __repr__(self) -> str:
        if self.multibyte:
            return f"LispString({self.text()!r})"
        return f"LispString({self.to_bytes()!r})"


class ValueKind(str, Enum):
    NIL = "nil"
    SYMBOL = "symbol"
    FIXNUM = "fixnum"
    FLOAT = "float"
    BIGNUM = "bignum"
    STRING = "string"


def is_fixnum(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and fixnum_in_range(value)


def kind_of(value: object) -> ValueKind:
    if value is NIL:
        return ValueKind.NIL
    if isinstance(value, Symbol):
        return ValueKind.SYMBOL
    if is_fixnum(value):
        return ValueKind.FIXNUM
    if isinstance(value, LispFloat):
        return ValueKind.FLOAT
    if isinstance(value, LispBignum):
        return ValueKind.BIGNUM
    if isinstance(value, LispString):
        return ValueKind.STRING
    raise TypeError(f"unsupported runtime type {type(value).__name__}")


def is_heap_object(value: object) -> bool:
    return isinstance(value, (LispFloat, LispBignum, LispString))


def as_fixnum(value: object, *, where: str = "fixnump") -> int:
    if not is_fixnum(value):
        raise WrongTypeArgument(where, value)
    return int(value)


def as_flag(value: object) -> bool:
    """Optional flag argument: anything but nil sets it."""
    return value is not NIL
