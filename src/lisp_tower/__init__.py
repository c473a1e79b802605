"""lisp-tower public API."""

from .errors import (
    ArithmeticFailure,
    ConversionError,
    LispError,
    LispRuntimeError,
    WrongNumberOfArguments,
    WrongTypeArgument,
)
from .values import MAX_FIXNUM, MIN_FIXNUM, NIL, T, LispBignum, LispFloat, LispString, Symbol, ValueKind, kind_of
from .numeric import (
    Big,
    Float,
    Int,
    NumberValue,
    coerce_integer,
    combine,
    compare,
    is_zero,
    negate,
    numbers_equal,
    value_of,
)
from .arith import (
    add,
    add_one,
    divide,
    greater_than,
    greater_than_or_eq,
    less_than,
    less_than_or_eq,
    logand,
    logior,
    maximum,
    minimum,
    modulo,
    multiply,
    num_eq,
    num_ne,
    remainder,
    sub_one,
    subtract,
)
from .character import (
    MAX_CHAR,
    MAX_UNICODE_CHAR,
    bytes_from_integers,
    is_character,
    make_repeated,
    max_character,
    string_from_codepoints,
)
from .arena import Arena, Block
from .primitives import Subr, defun, funcall, lookup, primitive_names

__all__ = [
    "ArithmeticFailure",
    "ConversionError",
    "LispError",
    "LispRuntimeError",
    "WrongNumberOfArguments",
    "WrongTypeArgument",
    "MAX_FIXNUM",
    "MIN_FIXNUM",
    "NIL",
    "T",
    "LispBignum",
    "LispFloat",
    "LispString",
    "Symbol",
    "ValueKind",
    "kind_of",
    "Big",
    "Float",
    "Int",
    "NumberValue",
    "coerce_integer",
    "combine",
    "compare",
    "is_zero",
    "negate",
    "numbers_equal",
    "value_of",
    "add",
    "add_one",
    "divide",
    "greater_than",
    "greater_than_or_eq",
    "less_than",
    "less_than_or_eq",
    "logand",
    "logior",
    "maximum",
    "minimum",
    "modulo",
    "multiply",
    "num_eq",
    "num_ne",
    "remainder",
    "sub_one",
    "subtract",
    "MAX_CHAR",
    "MAX_UNICODE_CHAR",
    "bytes_from_integers",
    "is_character",
    "make_repeated",
    "max_character",
    "string_from_codepoints",
    "Arena",
    "Block",
    "Subr",
    "defun",
    "funcall",
    "lookup",
    "primitive_names",
]
