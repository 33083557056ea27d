"""Uniform pull interface over whatever entry source the caller configured."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, NamedTuple, Optional, Sequence

from ..errors import MalformedEntry


class ResumeHint(NamedTuple):
    """Tells the entry source that the node at *pointer* now holds *value*."""

    pointer: str
    value: Any


class Pull(NamedTuple):
    entry: Optional[Sequence[Any]]
    exhausted: bool


_EXHAUSTED = Pull(entry=None, exhausted=True)


def check_entry(entry: Any) -> Sequence[Any]:
    """Return *entry* if it is a ``(pointer, value)`` pair, else raise."""
    if not isinstance(entry, (list, tuple)) or len(entry) < 2:
        raise MalformedEntry(entry)
    return entry


class IteratorAdapter:
    """Wrap a finite sequence, a pull-iterator or a pull function behind
    ``pull(hint)``.

    * ``list`` / ``tuple``: consumed through the adapter's own cursor;
      hints are meaningless for a fixed sequence and are dropped.
    * iterator / iterable: pulled with ``next()``.  When the iterator
      exposes ``resume(pointer, value)``, a hint is delivered there first.
    * any other callable: called as ``source(hint)`` with the pending
      ``ResumeHint`` or ``None``; returning ``None`` (or raising
      ``StopIteration``) ends the walk.
    """

    def __init__(self, source: Any) -> None:
        if isinstance(source, (str, bytes, Mapping)):
            raise TypeError(f"mutant-json: iterator must yield entries, got {type(source).__name__}")

        self._sequence: Optional[Sequence[Any]] = None
        self._cursor = 0
        self._iterator: Optional[Iterator[Any]] = None
        self._pull_fn: Optional[Callable[[Optional[ResumeHint]], Any]] = None

        if isinstance(source, (list, tuple)):
            self._sequence = source
        elif isinstance(source, Iterator):
            self._iterator = source
        elif isinstance(source, Iterable):
            self._iterator = iter(source)
        elif callable(source):
            self._pull_fn = source
        else:
            raise TypeError(
                "mutant-json: iterator must be a sequence, an iterable or a pull function, "
                f"got {type(source).__name__}"
            )

    def pull(self, hint: Optional[ResumeHint] = None) -> Pull:
        if self._sequence is not None:
            if self._cursor >= len(self._sequence):
                return _EXHAUSTED
            entry = self._sequence[self._cursor]
            self._cursor += 1
            return Pull(entry=check_entry(entry), exhausted=False)

        if self._pull_fn is not None:
            try:
                entry = self._pull_fn(hint)
            except StopIteration:
                return _EXHAUSTED
            if entry is None:
                return _EXHAUSTED
            return Pull(entry=check_entry(entry), exhausted=False)

        if hint is not None:
            resume = getattr(self._iterator, "resume", None)
            if callable(resume):
                resume(hint.pointer, hint.value)

        try:
            entry = next(self._iterator)
        except StopIteration:
            return _EXHAUSTED
        return Pull(entry=check_entry(entry), exhausted=False)
