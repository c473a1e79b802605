"""Variadic arithmetic and comparison procedures."""

from __future__ import annotations

from functools import reduce
from typing import Callable, Iterable

from .errors import ArithmeticFailure
from .numeric import (
    Int,
    NumberValue,
    compare,
    negate,
    normalize,
    number_add,
    number_div,
    number_mod,
    number_mul,
    number_sub,
    numbers_equal,
    value_of,
)
from .values import as_fixnum

_ONE = Int(1)


def _values(numbers: Iterable[object]) -> list[NumberValue]:
    return [value_of(x) for x in numbers]


def add(numbers: Iterable[object] = ()) -> NumberValue:
    return normalize(reduce(number_add, _values(numbers), Int(0)))


def subtract(number: object | None = None, numbers: Iterable[object] = ()) -> NumberValue:
    if number is None:
        return Int(0)
    first = value_of(number)
    rest = _values(numbers)
    if not rest:
        return normalize(negate(first))
    return normalize(reduce(number_sub, rest, first))


def multiply(numbers: Iterable[object] = ()) -> NumberValue:
    return normalize(reduce(number_mul, _values(numbers), Int(1)))


def divide(number: object, divisors: Iterable[object] = ()) -> NumberValue:
    return normalize(reduce(number_div, _values(divisors), value_of(number)))


def add_one(number: object) -> NumberValue:
    return normalize(number_add(value_of(number), _ONE))


def sub_one(number: object) -> NumberValue:
    return normalize(number_sub(value_of(number), _ONE))


def modulo(x: object, y: object) -> NumberValue:
    return normalize(number_mod(value_of(x), value_of(y)))


def remainder(x: object, y: object) -> int:
    """Truncated remainder over fixnums; the result has the sign of ``x``."""
    dividend = as_fixnum(x, where="integer-or-marker-p")
    divisor = as_fixnum(y, where="integer-or-marker-p")
    if divisor == 0:
        raise ArithmeticFailure("Arithmetic error: remainder by zero")
    rem = abs(dividend) % abs(divisor)
    return -rem if dividend < 0 else rem


def num_eq(number: object, numbers: Iterable[object] = ()) -> bool:
    first = value_of(number)
    return all(numbers_equal(first, x) for x in _values(numbers))


def num_ne(number: object, numbers: Iterable[object] = ()) -> bool:
    first = value_of(number)
    return all(not numbers_equal(first, x) for x in _values(numbers))


def _chain(number: object, numbers: Iterable[object], holds: Callable[[int], bool]) -> bool:
    acc = value_of(number)
    for x in _values(numbers):
        order = compare(acc, x)
        if order is None or not holds(order):
            return False
        acc = x
    return True


def less_than(number: object, numbers: Iterable[object] = ()) -> bool:
    return _chain(number, numbers, lambda order: order < 0)


def less_than_or_eq(number: object, numbers: Iterable[object] = ()) -> bool:
    return _chain(number, numbers, lambda order: order <= 0)


def greater_than(number: object, numbers: Iterable[object] = ()) -> bool:
    return _chain(number, numbers, lambda order: order > 0)


def greater_than_or_eq(number: object, numbers: Iterable[object] = ()) -> bool:
    return _chain(number, numbers, lambda order: order >= 0)


def _max_val(acc: NumberValue, x: NumberValue) -> NumberValue:
    return acc if compare(acc, x) == 1 else x


def _min_val(acc: NumberValue, x: NumberValue) -> NumberValue:
    return acc if compare(acc, x) == -1 else x


def maximum(number: object, numbers: Iterable[object] = ()) -> NumberValue:
    """Largest operand; on a tie the later operand wins."""
    return normalize(reduce(_max_val, _values(numbers), value_of(number)))


def minimum(number: object, numbers: Iterable[object] = ()) -> NumberValue:
    return normalize(reduce(_min_val, _values(numbers), value_of(number)))


def logior(values: Iterable[object] = ()) -> int:
    return reduce(lambda acc, x: acc | as_fixnum(x, where="integer-or-marker-p"), values, 0)


def logand(values: Iterable[object] = ()) -> int:
    return reduce(lambda acc, x: acc & as_fixnum(x, where="integer-or-marker-p"), values, -1)
