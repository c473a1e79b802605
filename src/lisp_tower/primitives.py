"""Primitive table: Lisp-visible names bound to the numeric and text procedures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Sequence

from . import arith, character
from .arena import Arena
from .errors import LispError, WrongNumberOfArguments, classify_runtime_exception
from .numeric import value_of
from .values import as_flag

SubrFn = Callable[[Sequence[object]], object]


@dataclass(frozen=True)
class SubrInfo:
    name: str
    min_args: int
    max_args: int | None

    @property
    def rest(self) -> bool:
        return self.max_args is None


@dataclass(frozen=True)
class Subr:
    name: str
    min_args: int
    max_args: int | None
    fn: SubrFn

    @property
    def info(self) -> SubrInfo:
        return SubrInfo(name=self.name, min_args=self.min_args, max_args=self.max_args)

    def check_arity(self, given: int) -> None:
        if given < self.min_args or (self.max_args is not None and given > self.max_args):
            raise WrongNumberOfArguments(self.name, given, self.min_args, self.max_args)


_SUBRS: dict[str, Subr] = {}


def defun(name: str, *, min_args: int, max_args: int | None) -> Callable[[SubrFn], SubrFn]:
    def register(fn: SubrFn) -> SubrFn:
        if name in _SUBRS:
            raise ValueError(f"primitive {name!r} is already defined")
        _SUBRS[name] = Subr(name=name, min_args=min_args, max_args=max_args, fn=fn)
        return fn

    return register


def lookup(name: str) -> Subr:
    subr = _SUBRS.get(name)
    if subr is None:
        raise NameError(f"Symbol's function definition is void: {name}")
    return subr


def primitive_names() -> tuple[str, ...]:
    return tuple(sorted(_SUBRS))


def funcall(name: str, args: Sequence[object], arena: Arena) -> object:
    """Call primitive ``name`` on tagged ``args`` and materialize the result in ``arena``."""
    subr = lookup(name)
    subr.check_arity(len(args))
    try:
        result = subr.fn(args)
    except LispError:
        raise
    except Exception as err:
        raise classify_runtime_exception(err) from err
    return arena.add(result)


_OPTIONAL: Final = None


def _optional(args: Sequence[object], index: int) -> object:
    return args[index] if len(args) > index else _OPTIONAL


@defun("+", min_args=0, max_args=None)
def _plus(args):
    return arith.add(args)


@defun("-", min_args=0, max_args=None)
def _minus(args):
    if not args:
        return arith.subtract()
    return arith.subtract(value_of(args[0]), args[1:])


@defun("*", min_args=0, max_args=None)
def _times(args):
    return arith.multiply(args)


@defun("/", min_args=1, max_args=None)
def _quo(args):
    return arith.divide(args[0], args[1:])


@defun("1+", min_args=1, max_args=1)
def _add1(args):
    return arith.add_one(args[0])


@defun("1-", min_args=1, max_args=1)
def _sub1(args):
    return arith.sub_one(args[0])


@defun("mod", min_args=2, max_args=2)
def _mod(args):
    return arith.modulo(args[0], args[1])


@defun("%", min_args=2, max_args=2)
def _rem(args):
    return arith.remainder(args[0], args[1])


@defun("max", min_args=1, max_args=None)
def _max(args):
    return arith.maximum(args[0], args[1:])


@defun("min", min_args=1, max_args=None)
def _min(args):
    return arith.minimum(args[0], args[1:])


@defun("logior", min_args=0, max_args=None)
def _logior(args):
    return arith.logior(args)


@defun("logand", min_args=0, max_args=None)
def _logand(args):
    return arith.logand(args)


@defun("=", min_args=1, max_args=None)
def _eqlsign(args):
    return arith.num_eq(args[0], args[1:])


@defun("/=", min_args=1, max_args=None)
def _neq(args):
    return arith.num_ne(args[0], args[1:])


@defun("<", min_args=1, max_args=None)
def _lss(args):
    return arith.less_than(args[0], args[1:])


@defun("<=", min_args=1, max_args=None)
def _leq(args):
    return arith.less_than_or_eq(args[0], args[1:])


@defun(">", min_args=1, max_args=None)
def _gtr(args):
    return arith.greater_than(args[0], args[1:])


@defun(">=", min_args=1, max_args=None)
def _geq(args):
    return arith.greater_than_or_eq(args[0], args[1:])


@defun("characterp", min_args=1, max_args=1)
def _characterp(args):
    return character.is_character(args[0])


@defun("max-char", min_args=0, max_args=1)
def _max_char(args):
    return character.max_character(as_flag(_optional(args, 0)))


@defun("string", min_args=0, max_args=None)
def _string(args):
    return character.string_from_codepoints(args)


@defun("unibyte-string", min_args=0, max_args=None)
def _unibyte_string(args):
    return character.bytes_from_integers(args)


@defun("make-string", min_args=2, max_args=3)
def _make_string(args):
    return character.make_repeated(args[0], args[1], as_flag(_optional(args, 2)))
