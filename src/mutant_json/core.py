"""Traversal driver and its configuration.

Execution flow (``TraversalDriver.run`` entry point)::

    document (maybe awaitable)
      │  await while awaitable                   ← suspension point (a)
      ▼
    IteratorAdapter.pull(hint) → [pointer, value]
      │
      ├─ value awaitable → await, implicit replace   ← suspension point (a)
      │                    hint = (pointer, resolved)
      │
      └─ MutationBridge.process(value, pointer, document, callback)
             │  await deferred request            ← suspension point (b)
             ▼
         Outcome(document, hint) | None
      │
      ▼
    repeat until exhausted (or after the first mutation with ``once``)

The loop is a single generator (``_steps``) run by the ``drive`` trampoline:
it stays synchronous until the first awaitable shows up and only then turns
into a coroutine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional

from .errors import MissingProcessCallback
from .iterators.adapter import IteratorAdapter, ResumeHint
from .iterators.traverse import TraverseIterator
from .mutation import MutationBridge, Patcher
from .patcher import apply_operation
from .patches import ALL_OPERATIONS, PatchOp, PatchRequest
from .utils.deferred import Steps, drive, is_deferred

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# TraversalOptions
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class TraversalOptions:
    """Configuration for one ``transform`` call.

    Attributes:
        iterator:    Sequence of entries, (resumable) iterator or pull function
                     replacing the default walk.
        patcher:     ``(document, operation) -> document``.
        promises:    Await awaitable entry values and an awaitable root.  When
                     off, awaitables reach the callback untouched.
        once:        Stop right after the first entry that mutated.
        force_async: Always return a coroutine, even if nothing was awaited.
        batch:       Apply every request of a ``mutate([...])`` sequence
                     (``False``: only the first one).
        operations:  Operations the active patcher accepts.
        recursive, nested, step, test:
                     Forwarded to ``TraverseIterator`` (along with
                     *promises*); ignored when *iterator* is given.
    """

    iterator: Any = None
    patcher: Patcher = apply_operation
    promises: bool = True
    once: bool = False
    force_async: bool = False
    batch: bool = True
    operations: FrozenSet[PatchOp] = ALL_OPERATIONS
    recursive: bool = True
    nested: bool = False
    step: int = 1
    test: Any = None

    def build_iterator(self, document: Any) -> Any:
        if self.iterator is not None:
            return self.iterator
        return TraverseIterator(
            document,
            recursive=self.recursive,
            nested=self.nested,
            step=self.step,
            test=self.test,
            deferred=self.promises,
        )


# ─────────────────────────────────────────────────────────────────────────────
# TraversalDriver
# ─────────────────────────────────────────────────────────────────────────────


class TraversalDriver:
    """Pull entries, run the callback, apply patches, resume, repeat.

    The document is never mutated in place: each step replaces the driver's
    reference with whatever the patcher returned.
    """

    def __init__(self, options: Optional[TraversalOptions] = None) -> None:
        self.options = options or TraversalOptions()
        self.bridge = MutationBridge(
            self.options.patcher,
            batch=self.options.batch,
            operations=self.options.operations,
        )

    def run(self, document: Any, callback: Callable[..., Any]) -> Any:
        """Transform *document*; returns the result or a coroutine of it."""
        if not callable(callback):
            raise MissingProcessCallback(callback)
        return drive(self._steps(document, callback), force_async=self.options.force_async)

    def _steps(self, document: Any, callback: Callable[..., Any]) -> Steps:
        options = self.options

        while options.promises and is_deferred(document):
            logger.debug("awaiting deferred root document")
            document = yield document

        adapter = IteratorAdapter(options.build_iterator(document))
        hint: Optional[ResumeHint] = None
        stopped = False

        while True:
            if stopped and options.once:
                logger.debug("stopping after first mutation")
                return document

            pulled = adapter.pull(hint)
            if pulled.exhausted:
                return document

            pointer, value = pulled.entry[0], pulled.entry[1]

            if options.promises and is_deferred(value):
                logger.debug("awaiting deferred value at %r", pointer)
                resolved = yield value
                replace = PatchRequest(op=PatchOp.REPLACE, path=pointer, value=resolved)
                document = options.patcher(document, replace.to_operation())
                hint = ResumeHint(pointer, resolved)
                continue

            outcome = self.bridge.process(value, pointer, document, callback)
            if is_deferred(outcome):
                outcome = yield outcome

            if outcome is None:
                hint = None
                continue

            document, hint = outcome.document, outcome.hint
            stopped = True
