"""Structured error types for the numeric tower and text primitives."""

from __future__ import annotations

from dataclasses import dataclass


class LispError(Exception):
    """Base class for structured lisp-tower errors."""


class LispRuntimeError(LispError):
    """Generic failure raised while running a primitive."""


class ConversionError(LispRuntimeError):
    """Value is outside the byte, scalar or fixnum range it was converted to."""


class ArithmeticFailure(LispRuntimeError):
    """Integer division, modulo or remainder by zero."""


@dataclass(frozen=True)
class WrongTypeArgument(LispRuntimeError):
    """Argument failed the type predicate a primitive requires."""

    predicate: str
    value: object

    def __str__(self) -> str:
        return f"Wrong type argument: {self.predicate}, {self.value!r}"


@dataclass(frozen=True)
class WrongNumberOfArguments(LispRuntimeError):
    name: str
    given: int
    min_args: int
    max_args: int | None = None

    def __str__(self) -> str:
        upper = "many" if self.max_args is None else str(self.max_args)
        return f"Wrong number of arguments: {self.name}, {self.given} (expected {self.min_args}..{upper})"


def classify_runtime_exception(err: Exception) -> LispRuntimeError:
    """Best-effort classification of plain Python failures for structured APIs."""
    if isinstance(err, LispRuntimeError):
        return err
    message = str(err)
    if isinstance(err, ZeroDivisionError):
        return ArithmeticFailure(message or "Arithmetic error")
    if isinstance(err, OverflowError):
        return ConversionError(message)
    if isinstance(err, TypeError):
        return WrongTypeArgument("type", message)

    lowered = message.lower()
    conversion_markers = (
        "range",
        "convert",
        "codepoint",
        "chr()",
        "byte",
        "infinity",
        "nan",
        "surrogate",
    )
    if isinstance(err, ValueError) and any(marker in lowered for marker in conversion_markers):
        return ConversionError(message)

    return LispRuntimeError(message)
