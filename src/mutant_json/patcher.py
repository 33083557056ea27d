"""Default patch applier backed by the ``jsonpatch`` library.

Contract (shared by any custom ``patcher`` option)::

    patcher(document, operation) -> new_document

*operation* is one JSON Patch mapping.  The input document is never touched;
a pointer that does not exist (for anything but ``add``) raises whatever the
applier raises and the engine lets it through.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping

import jsonpatch

from .utils.deferred import is_deferred


def _share_deferred(value: Any, memo: Dict[int, Any]) -> None:
    """Pre-seed a ``deepcopy`` memo so awaitables are shared, not copied.

    Coroutines and futures cannot be deep-copied; a document may hold them
    until the driver resolves them.
    """
    if is_deferred(value):
        memo[id(value)] = value
    elif isinstance(value, dict):
        for item in value.values():
            _share_deferred(item, memo)
    elif isinstance(value, list):
        for item in value:
            _share_deferred(item, memo)


def detached_copy(document: Any) -> Any:
    """Deep copy of *document* that keeps pending awaitables by reference."""
    memo: Dict[int, Any] = {}
    _share_deferred(document, memo)
    return copy.deepcopy(document, memo)


def apply_operation(document: Any, operation: Mapping[str, Any]) -> Any:
    """Apply a single JSON Patch *operation* to a copy of *document*.

    Examples::

        apply_operation({"a": 0}, {"op": "replace", "path": "/a", "value": 1})
        → {"a": 1}
        apply_operation({"a": 0}, {"op": "remove", "path": "/b"})
        → raises jsonpatch.JsonPatchConflict
    """
    return jsonpatch.apply_patch(detached_copy(document), [dict(operation)], in_place=True)
