"""Mutation bridge: runs the per-entry callback and turns the patch request it
issues into a new document.

Callback signature::

    def process(mutate, value, pointer, document) -> None

``mutate`` accepts a request mapping, a list of them, or an awaitable
resolving to either.  It is write-once per entry: the first call wins and any
further call for the same entry is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, FrozenSet, NamedTuple, Optional

from .iterators.adapter import ResumeHint
from .iterators.traverse import is_container
from .patches import ALL_OPERATIONS, PatchOp, normalize_patches
from .resolvers.pointer import tap
from .utils.deferred import Steps, drive, is_deferred

logger = logging.getLogger(__name__)

Patcher = Callable[[Any, dict], Any]

_UNSET = object()


class Outcome(NamedTuple):
    """Result of an entry that issued a mutation."""

    document: Any
    hint: Optional[ResumeHint]


class Mutator:
    """The ``mutate`` capability bound to one entry."""

    def __init__(self, pointer: str) -> None:
        self.pointer = pointer
        self._request: Any = _UNSET
        self._closed = False

    @property
    def issued(self) -> bool:
        return self._request is not _UNSET

    @property
    def request(self) -> Any:
        return None if self._request is _UNSET else self._request

    def close(self) -> None:
        self._closed = True

    def __call__(self, request: Any) -> None:
        if self._closed:
            raise RuntimeError(f"mutant-json: mutate for {self.pointer!r} called after its entry was processed")
        if self.issued:
            logger.debug("ignoring repeated mutate call for %r", self.pointer)
            return
        self._request = request


class MutationBridge:
    """Invoke the callback for one entry and apply what it asked for.

    Args:
        patcher:    ``(document, operation) -> document``; must not mutate
                    its input.
        batch:      Apply every request of a sequence (``True``) or only the
                    first one (``False``).
        operations: Operation set accepted by *patcher*.
    """

    def __init__(
            self,
            patcher: Patcher,
            *,
            batch: bool = True,
            operations: FrozenSet[PatchOp] = ALL_OPERATIONS,
    ) -> None:
        self.patcher = patcher
        self.batch = batch
        self.operations = operations

    def process(self, value: Any, pointer: str, document: Any, callback: Callable[..., Any]) -> Any:
        """Return an ``Outcome``, ``None`` (no mutation) or a coroutine of either."""
        return drive(self.steps(value, pointer, document, callback))

    def steps(self, value: Any, pointer: str, document: Any, callback: Callable[..., Any]) -> Steps:
        mutate = Mutator(pointer)
        try:
            returned = callback(mutate, value, pointer, document)
            if is_deferred(returned):
                yield returned
        finally:
            mutate.close()

        if not mutate.issued:
            return None

        request = mutate.request
        if is_deferred(request):
            logger.debug("awaiting deferred patch request for %r", pointer)
            request = yield request

        patches = normalize_patches(request, pointer, self.operations)
        if not self.batch:
            patches = patches[:1]
        if not patches:
            return None

        for patch in patches:
            document = self.patcher(document, patch.to_operation())
            logger.debug("applied %s at %r", patch.op.value, patch.path)

        last = patches[-1]
        hint = None
        if last.op is not PatchOp.REMOVE:
            patched = tap(document, last.path)
            if is_container(patched):
                hint = ResumeHint(last.path, patched)
        return Outcome(document, hint)
