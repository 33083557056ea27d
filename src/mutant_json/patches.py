"""Patch requests: the closed operation set, the normalized request type and
the normalizer/validator that sits between a callback's ``mutate`` call and
the patch applier.

A request as written by a callback is a plain JSON Patch mapping in which
every key is optional::

    {"value": 1}                                 → replace at the entry pointer
    {"op": "remove"}                             → remove the entry
    {"op": "add", "path": "/a_suffix", "value": 0}
    {"op": "move", "from": "/a", "path": "/b"}

``normalize_patches`` fills the defaults and rejects anything the applier
must never see.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from .errors import MalformedPointer, UnknownOperation
from .resolvers.pointer import SEPARATOR


class PatchOp(str, Enum):
    """JSON Patch operations understood by the engine."""

    REPLACE = "replace"
    REMOVE = "remove"
    ADD = "add"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


ALL_OPERATIONS: FrozenSet[PatchOp] = frozenset(PatchOp)

DEFAULT_OPERATION = PatchOp.REPLACE


class _Missing:
    """Sentinel type for an absent ``value`` member (``None`` is a valid value)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class PatchRequest:
    """A validated patch request, ready for the applier.

    Attributes:
        op:    Operation, always a member of the active operation set.
        path:  Target pointer (``""`` or starting with ``/``).
        from_: Source pointer for ``move`` / ``copy``; ``None`` when absent.
        value: Operand; ``MISSING`` when the request carried no ``value``.
    """

    op: PatchOp
    path: str
    from_: Optional[str] = None
    value: Any = MISSING

    def to_operation(self) -> dict[str, Any]:
        """Return the JSON Patch mapping handed to the patch applier."""
        operation: dict[str, Any] = {"op": self.op.value, "path": self.path}
        if self.from_ is not None:
            operation["from"] = self.from_
        if self.value is not MISSING:
            operation["value"] = self.value
        return operation


def _coerce_op(op: Any, operations: FrozenSet[PatchOp]) -> PatchOp:
    try:
        member = PatchOp(op)
    except ValueError:
        raise UnknownOperation(op) from None
    if member not in operations:
        raise UnknownOperation(op)
    return member


def _check_pointer(pointer: Any) -> None:
    if not isinstance(pointer, str):
        raise MalformedPointer(pointer)
    if pointer and not pointer.startswith(SEPARATOR):
        raise MalformedPointer(pointer)


def normalize_patch(
        request: Mapping[str, Any],
        default_pointer: str,
        operations: FrozenSet[PatchOp] = ALL_OPERATIONS,
) -> PatchRequest:
    """Fill defaults on a single request and validate it."""
    if not isinstance(request, Mapping):
        raise TypeError(f"mutant-json: patch request must be a mapping, got {type(request).__name__}")

    op = _coerce_op(request.get("op", DEFAULT_OPERATION.value), operations)

    path = request.get("path", default_pointer)
    _check_pointer(path)

    from_ = request.get("from")
    if from_ is not None:
        _check_pointer(from_)

    return PatchRequest(op=op, path=path, from_=from_, value=request.get("value", MISSING))


def normalize_patches(
        requests: Any,
        default_pointer: str,
        operations: FrozenSet[PatchOp] = ALL_OPERATIONS,
) -> List[PatchRequest]:
    """Normalize one request or an ordered sequence of requests.

    Order is preserved and nothing is de-duplicated.  The whole sequence is
    validated before the caller gets anything back, so a bad request halfway
    through means none of them reach the applier.
    """
    items: Iterable[Any] = requests if isinstance(requests, (list, tuple)) else [requests]
    return [normalize_patch(item, default_pointer, operations) for item in items]
