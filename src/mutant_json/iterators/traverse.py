"""Default tree walk: a resumable depth-first iterator of ``[pointer, value]``
entries.

Walk order is dict insertion order and list index order; the root itself is
never emitted.  Children of an emitted entry are expanded lazily, on the
*next* pull, which is what makes ``resume`` work::

    walker = TraverseIterator({"a": "leaf"})
    next(walker)                        → ["/a", "leaf"]
    walker.resume("/a", {"b": 1})       # /a was replaced by a dict
    next(walker)                        → ["/a/b", 1]
    walker.resume("/a/b", 2)            # scalars are visited again
    next(walker)                        → ["/a/b", 2]

A hint may also name a node other than the last emitted one (a sibling
patched from elsewhere, or a child of an emitted container).  Queued stale
copies of that subtree are dropped and the new value is walked in their
place; the last emitted node is still expanded.

Options:

* ``recursive`` (default ``True``): descend into nested dicts / lists.
  When ``False`` only the root's direct children are emitted.
* ``nested`` (default ``False``): also emit container entries, right
  before their children.
* ``step`` (default ``1``): visit every *step*-th child at each level.
* ``test``: entry filter, see ``filters.compile_filter``.  Containers
  matching an explicit ``test`` are emitted even when ``nested`` is off.
  Recursion is not affected by the filter.
* ``deferred`` (default ``True``): emit awaitable leaves whatever ``test``
  says, so the driver gets to resolve them.

Awaitables are treated as leaves; the driver resolves them and resumes the
walk into the resolved value.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from ..resolvers.pointer import SEPARATOR, join
from ..utils.deferred import is_deferred
from .filters import compile_filter

Node = Tuple[str, Any]


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def within(pointer: str, ancestor: str) -> bool:
    """True if *pointer* is *ancestor* itself or lies below it."""
    return pointer == ancestor or pointer.startswith(ancestor + SEPARATOR)


def _children(pointer: str, value: Any, step: int) -> List[Node]:
    if isinstance(value, dict):
        items = [(join(pointer, key), child) for key, child in value.items()]
    else:
        items = [(join(pointer, idx), child) for idx, child in enumerate(value)]
    return items[::step]


class TraverseIterator(Iterator[List[Any]]):
    """Resumable depth-first walk over a document snapshot."""

    def __init__(
            self,
            document: Any,
            *,
            recursive: bool = True,
            nested: bool = False,
            step: int = 1,
            test: Any = None,
            deferred: bool = True,
    ) -> None:
        if not isinstance(step, int) or isinstance(step, bool) or step < 1:
            raise ValueError(f"mutant-json: step must be a positive integer, got {step!r}")

        self.recursive = recursive
        self.nested = nested
        self.step = step
        self.deferred = deferred
        self._filter = compile_filter(test)

        self._stack: List[Node] = []
        # Last emitted node whose children have not been expanded yet.
        self._pending: Optional[Node] = None

        if is_container(document):
            self._push_children("", document)

    # -- resume protocol ----------------------------------------------------

    def resume(self, pointer: str, value: Any) -> None:
        """Declare that the node at *pointer* now holds *value*.

        A container is walked into on the next pull instead of the stale
        subtree it replaced.  Anything else is visited again as a fresh
        entry.
        """
        if self._pending is not None:
            if within(self._pending[0], pointer):
                # the last emitted node is itself stale
                self._pending = None
            else:
                self._expand_pending()

        self._stack = [node for node in self._stack if not within(node[0], pointer)]

        if self.recursive and is_container(value):
            self._push_children(pointer, value)
        else:
            self._stack.append((pointer, value))

    # -- iteration ----------------------------------------------------------

    def __iter__(self) -> TraverseIterator:
        return self

    def __next__(self) -> List[Any]:
        self._expand_pending()

        while self._stack:
            pointer, value = self._stack.pop()

            if is_container(value) and self.recursive:
                if self._emits_container(pointer, value):
                    self._pending = (pointer, value)
                    return [pointer, value]
                self._push_children(pointer, value)
                continue

            if self._emits_leaf(pointer, value):
                self._pending = (pointer, value)
                return [pointer, value]

        raise StopIteration

    # -- internal helpers ---------------------------------------------------

    def _expand_pending(self) -> None:
        if self._pending is None:
            return
        pointer, value = self._pending
        self._pending = None
        if self.recursive and is_container(value):
            self._push_children(pointer, value)

    def _push_children(self, pointer: str, value: Any) -> None:
        self._stack.extend(reversed(_children(pointer, value, self.step)))

    def _emits_container(self, pointer: str, value: Any) -> bool:
        if self._filter is None:
            return self.nested
        return self._filter(pointer, value)

    def _emits_leaf(self, pointer: str, value: Any) -> bool:
        if self._filter is None or (self.deferred and is_deferred(value)):
            return True
        return self._filter(pointer, value)
