"""Allocation arenas that turn computed values into tagged runtime objects."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Final

from .numeric import Big, Float, Int, normalize
from .values import NIL, T, LispBignum, LispFloat, LispString, fixnum_in_range, is_heap_object

logger = logging.getLogger(__name__)

_GC_THRESHOLD: Final[int] = max(1, int(os.environ.get("LISP_TOWER_GC_THRESHOLD", "4096")))


class Arena(ABC):
    """Materializes values; immediates bypass allocation, heap objects do not.

    An exclusive arena is a fresh context owned by one construction. A shared
    arena is the long-lived context that primitives mutate through.
    """

    def __init__(self, *, exclusive: bool = False) -> None:
        self._exclusive = exclusive

    @property
    def exclusive(self) -> bool:
        return self._exclusive

    @abstractmethod
    def _allocate(self, obj: object) -> object:
        ...

    def add(self, value: object) -> object:
        if value is None:
            return NIL
        if isinstance(value, bool):
            return T if value else NIL
        if isinstance(value, Int):
            return value.value
        if isinstance(value, Float):
            return self._allocate(LispFloat(value.value))
        if isinstance(value, Big):
            narrowed = normalize(value)
            if isinstance(narrowed, Int):
                return narrowed.value
            return self._allocate(LispBignum(value.value))
        if isinstance(value, int):
            if fixnum_in_range(value):
                return value
            return self._allocate(LispBignum(value))
        if isinstance(value, float):
            return self._allocate(LispFloat(value))
        if isinstance(value, str):
            return self._allocate(LispString.from_text(value))
        if isinstance(value, (bytes, bytearray)):
            return self._allocate(LispString.from_bytes(bytes(value)))
        if is_heap_object(value):
            return self._allocate(value)
        raise TypeError(f"cannot materialize {type(value).__name__}")


class Block(Arena):
    """List-backed heap with a threshold-triggered collection pass.

    An exclusive block never collects on allocation; its owner calls
    ``collect`` once the construction is done.
    """

    def __init__(self, *, exclusive: bool = False, gc_threshold: int = _GC_THRESHOLD) -> None:
        super().__init__(exclusive=exclusive)
        self.gc_threshold = max(1, gc_threshold)
        self.objects: list[object] = []
        self.collections = 0
        self._roots: dict[int, object] = {}
        self._since_collect = 0

    def root(self, obj: object) -> object:
        self._roots[id(obj)] = obj
        return obj

    def unroot(self, obj: object) -> None:
        self._roots.pop(id(obj), None)

    def collect(self) -> int:
        """Drop every heap object that is not rooted; returns how many were freed."""
        before = len(self.objects)
        self.objects = [obj for obj in self.objects if id(obj) in self._roots]
        self._since_collect = 0
        self.collections += 1
        freed = before - len(self.objects)
        logger.debug("arena collection %d freed %d of %d objects", self.collections, freed, before)
        return freed

    def _allocate(self, obj: object) -> object:
        if not self.exclusive and self._since_collect >= self.gc_threshold:
            self.collect()
        self.objects.append(obj)
        self._since_collect += 1
        return obj

    def __len__(self) -> int:
        return len(self.objects)
