"""Numeric tower: fixnum, float and bignum values with promotion rules."""

from __future__ import annotations

import logging
import math
import os
import sys
from dataclasses import dataclass
from typing import Callable, Final, Union

import jax
from jax import lax
import jax.numpy as jnp

from .errors import ArithmeticFailure, ConversionError, WrongTypeArgument
from .values import MAX_FIXNUM, MIN_FIXNUM, LispBignum, LispFloat, fixnum_in_range

# Float arithmetic is float64 throughout; without x64 jnp silently narrows to float32.
jax.config.update("jax_enable_x64", True)

logger = logging.getLogger(__name__)

_USE_JITTED_FLOAT_OPS: Final[bool] = os.environ.get("LISP_TOWER_DISABLE_JITTED_FLOAT_OPS", "0") != "1"
_FLOAT_ULPS: Final[int] = 2


@dataclass(frozen=True)
class Int:
    value: int

    def __post_init__(self) -> None:
        if not fixnum_in_range(self.value):
            raise ConversionError(f"{self.value} is outside the fixnum range")


@dataclass(frozen=True)
class Float:
    value: float


@dataclass(frozen=True)
class Big:
    value: int


NumberValue = Union[Int, Float, Big]

IntOp = Callable[[int, int], int]
FloatOp = Callable[[float, float], float]
BigOp = Callable[[int, int], int]


def _unreachable(value: object):
    raise TypeError(f"not a numeric value: {value!r}")


def value_of(value: object) -> NumberValue:
    """Extract a numeric value from a tagged number."""
    if isinstance(value, (Int, Float, Big)):
        return value
    if isinstance(value, LispFloat):
        return Float(value.value)
    if isinstance(value, LispBignum):
        return Big(value.value)
    if isinstance(value, bool):
        raise WrongTypeArgument("numberp", value)
    if isinstance(value, int):
        return integer_value(value)
    if isinstance(value, float):
        return Float(value)
    raise WrongTypeArgument("numberp", value)


def integer_value(value: int) -> NumberValue:
    if fixnum_in_range(value):
        return Int(value)
    return Big(value)


def coerce_integer(value: NumberValue) -> NumberValue:
    """Narrow a float or bignum to the smallest integer variant that holds it."""
    if isinstance(value, Float):
        x = value.value
        if not math.isfinite(x):
            raise ConversionError(f"Cannot convert {x} to an integer")
        if MIN_FIXNUM <= x <= MAX_FIXNUM:
            return Int(int(x))
        return Big(int(x))
    if isinstance(value, Big):
        if fixnum_in_range(value.value):
            return Int(value.value)
        return value
    return value


def normalize(value: NumberValue) -> NumberValue:
    """Restore the no-small-bignum invariant on a result."""
    if isinstance(value, Big):
        return coerce_integer(value)
    return value


def _big_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        logger.debug("bignum with %d bits saturated to infinity", value.bit_length())
        return math.inf if value > 0 else -math.inf


def _big_to_float_or_none(value: int) -> float | None:
    try:
        return float(value)
    except OverflowError:
        return None


def to_float(value: NumberValue) -> float:
    if isinstance(value, Int):
        return float(value.value)
    if isinstance(value, Float):
        return value.value
    if isinstance(value, Big):
        return _big_to_float(value.value)
    _unreachable(value)


def _int_result(value: int) -> NumberValue:
    if fixnum_in_range(value):
        return Int(value)
    logger.debug("fixnum overflow promoted to bignum: %d", value)
    return Big(value)


def combine(a: NumberValue, b: NumberValue, int_op: IntOp, float_op: FloatOp, big_op: BigOp) -> NumberValue:
    """Apply the operator matching the promotion class of ``a`` and ``b``."""
    if isinstance(a, Int):
        if isinstance(b, Int):
            return _int_result(int_op(a.value, b.value))
        if isinstance(b, Float):
            return Float(float_op(float(a.value), b.value))
        if isinstance(b, Big):
            return Big(big_op(a.value, b.value))
    elif isinstance(a, Float):
        if isinstance(b, Int):
            return Float(float_op(a.value, float(b.value)))
        if isinstance(b, Float):
            return Float(float_op(a.value, b.value))
        if isinstance(b, Big):
            return Float(float_op(a.value, _big_to_float(b.value)))
    elif isinstance(a, Big):
        if isinstance(b, Int):
            return Big(big_op(a.value, b.value))
        if isinstance(b, Float):
            return Float(float_op(_big_to_float(a.value), b.value))
        if isinstance(b, Big):
            return Big(big_op(a.value, b.value))
    _unreachable((a, b))


def negate(value: NumberValue) -> NumberValue:
    if isinstance(value, Int):
        # -MIN_FIXNUM does not fit.
        return _int_result(-value.value)
    if isinstance(value, Float):
        return Float(-value.value)
    if isinstance(value, Big):
        return Big(-value.value)
    _unreachable(value)


def is_zero(value: NumberValue) -> bool:
    if isinstance(value, (Int, Big)):
        return value.value == 0
    if isinstance(value, Float):
        return value.value == 0.0
    _unreachable(value)


def _float_fmod_floor(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    return jnp.mod(x, y)


_BASE_FLOAT_OPS: Final[dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]]] = {
    "+": lax.add,
    "-": lax.sub,
    "*": lax.mul,
    "/": lax.div,
    "mod": _float_fmod_floor,
}

_JITTED_FLOAT_OPS: dict[str, Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]] = {}


def _jitted_float_kernel(op: str) -> Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]:
    fn = _JITTED_FLOAT_OPS.get(op)
    if fn is None:
        fn = jax.jit(_BASE_FLOAT_OPS[op])
        _JITTED_FLOAT_OPS[op] = fn
    return fn


def _float_op(op: str) -> FloatOp:
    def apply(x: float, y: float) -> float:
        kernel = _jitted_float_kernel(op) if _USE_JITTED_FLOAT_OPS else _BASE_FLOAT_OPS[op]
        out = kernel(jnp.asarray(x, dtype=jnp.float64), jnp.asarray(y, dtype=jnp.float64))
        return float(out)

    apply.__name__ = f"float_{op}"
    return apply


_FLOAT_ADD: Final = _float_op("+")
_FLOAT_SUB: Final = _float_op("-")
_FLOAT_MUL: Final = _float_op("*")
_FLOAT_DIV: Final = _float_op("/")
_FLOAT_MOD: Final = _float_op("mod")


def _trunc_div(x: int, y: int) -> int:
    if y == 0:
        raise ArithmeticFailure("Arithmetic error: division by zero")
    quotient = abs(x) // abs(y)
    return quotient if (x < 0) == (y < 0) else -quotient


def _floor_mod(x: int, y: int) -> int:
    if y == 0:
        raise ArithmeticFailure("Arithmetic error: modulo by zero")
    return x % y


def number_add(a: NumberValue, b: NumberValue) -> NumberValue:
    return combine(a, b, int.__add__, _FLOAT_ADD, int.__add__)


def number_sub(a: NumberValue, b: NumberValue) -> NumberValue:
    return combine(a, b, int.__sub__, _FLOAT_SUB, int.__sub__)


def number_mul(a: NumberValue, b: NumberValue) -> NumberValue:
    return combine(a, b, int.__mul__, _FLOAT_MUL, int.__mul__)


def number_div(a: NumberValue, b: NumberValue) -> NumberValue:
    """Integers truncate toward zero; any float operand gives IEEE division."""
    return combine(a, b, _trunc_div, _FLOAT_DIV, _trunc_div)


def number_mod(a: NumberValue, b: NumberValue) -> NumberValue:
    """Floored modulo: a non-zero result has the sign of ``b``.

    A zero divisor is an error in every pairing, float ones included.
    """
    if is_zero(b):
        raise ArithmeticFailure("Arithmetic error: modulo by zero")
    return combine(a, b, _floor_mod, _FLOAT_MOD, _floor_mod)


def float_approx_eq(x: float, y: float, *, ulps: int = _FLOAT_ULPS) -> bool:
    """True when ``x`` and ``y`` are within machine epsilon or ``ulps`` units in the last place."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return x == y
    if x == y:
        return True
    if abs(x - y) <= sys.float_info.epsilon:
        return True
    if math.copysign(1.0, x) != math.copysign(1.0, y):
        return False
    bits = lax.bitcast_convert_type(jnp.asarray([x, y], dtype=jnp.float64), jnp.int64)
    return abs(int(bits[0]) - int(bits[1])) <= ulps


def numbers_equal(a: NumberValue, b: NumberValue) -> bool:
    if isinstance(a, Float) or isinstance(b, Float):
        x = _float_or_none(a)
        y = _float_or_none(b)
        if x is None or y is None:
            return False
        return float_approx_eq(x, y)
    return a.value == b.value


def _float_or_none(value: NumberValue) -> float | None:
    if isinstance(value, Big):
        return _big_to_float_or_none(value.value)
    return to_float(value)


def _ordering(x, y) -> int | None:
    if x < y:
        return -1
    if x > y:
        return 1
    if x == y:
        return 0
    return None


def compare(a: NumberValue, b: NumberValue) -> int | None:
    """-1, 0 or 1 like ``cmp``; ``None`` when the pair has no defined order."""
    if isinstance(a, (Int, Big)) and isinstance(b, (Int, Big)):
        return _ordering(a.value, b.value)
    x = _float_or_none(a)
    y = _float_or_none(b)
    if x is None or y is None:
        return None
    return _ordering(x, y)

