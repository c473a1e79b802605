"""Character predicates and string/byte-buffer constructors."""

from __future__ import annotations

from typing import Final, Iterable

import jax.numpy as jnp

from .errors import ConversionError, WrongTypeArgument
from .values import LispString, as_fixnum, is_fixnum

MAX_UNICODE_CHAR: Final[int] = 0x10FFFF
MAX_CHAR: Final[int] = 0x3FFFFF

_SURROGATES: Final[range] = range(0xD800, 0xE000)
_MAX_BYTE: Final[int] = 0xFF


def _is_scalar(code: int) -> bool:
    return 0 <= code <= MAX_UNICODE_CHAR and code not in _SURROGATES


def int_to_char(code: int) -> str:
    if not _is_scalar(code):
        raise ConversionError(f"{code} is not a valid Unicode scalar value")
    return chr(code)


def int_to_byte(value: int) -> int:
    if not 0 <= value <= _MAX_BYTE:
        raise ConversionError(f"{value} is out of byte range")
    return value


def is_character(value: object) -> bool:
    return is_fixnum(value) and _is_scalar(int(value))


def max_character(unicode: bool = False) -> int:
    return MAX_UNICODE_CHAR if unicode else MAX_CHAR


def string_from_codepoints(points: Iterable[object]) -> LispString:
    """Multibyte string of the given characters, in order."""
    chars = [int_to_char(as_fixnum(p, where="characterp")) for p in points]
    return LispString.from_text("".join(chars))


def bytes_from_integers(values: Iterable[object]) -> LispString:
    """Unibyte string of the given bytes, in order."""
    raw = [int_to_byte(as_fixnum(v, where="fixnump")) for v in values]
    return LispString(data=jnp.asarray(raw, dtype=jnp.uint8), multibyte=False)


def _as_length(value: object) -> int:
    length = as_fixnum(value, where="wholenump")
    if length < 0:
        raise WrongTypeArgument("wholenump", value)
    return length


def make_repeated(length: object, init: object, multibyte: bool = False) -> LispString:
    """``length`` copies of ``init`` as a multibyte string or a unibyte buffer.

    The output is allocated at its final size before it is filled:
    ``length * utf8_len(init)`` bytes for multibyte, ``length`` bytes otherwise.
    """
    count = _as_length(length)
    code = as_fixnum(init, where="characterp")
    if multibyte:
        encoded = int_to_char(code).encode("utf-8")
        unit = jnp.asarray(list(encoded), dtype=jnp.uint8)
        return LispString(data=jnp.tile(unit, count), multibyte=True)
    byte = int_to_byte(code)
    return LispString(data=jnp.full((count,), byte, dtype=jnp.uint8), multibyte=False)
