"""Error taxonomy raised by the traversal engine.

Every error carries a machine-readable ``code`` so callers can branch on the
failure kind without parsing messages::

    try:
        transform(doc, process)
    except MutantJsonError as exc:
        if exc.code == "unknown_operation":
            ...

None of these are recovered inside the engine.  Errors raised by the patch
applier (``jsonpatch.JsonPatchConflict`` and friends) are *not* wrapped; they
reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class MutantJsonError(Exception):
    """Base class for every error raised by the engine itself."""

    code: str = "mutant_json_error"


class MissingProcessCallback(MutantJsonError, TypeError):
    """The per-entry callback is not callable.  Always raised synchronously."""

    code = "missing_callback"

    def __init__(self, callback: Any = None) -> None:
        self.callback = callback
        super().__init__(
            f"mutant-json: process callback must be a callable, got {type(callback).__name__}"
        )


class MalformedEntry(MutantJsonError):
    """The iterator yielded something other than a ``(pointer, value)`` pair.

    Attributes:
        entry: The offending item as pulled from the iterator.
    """

    code = "malformed_entry"

    def __init__(self, entry: Any) -> None:
        self.entry = entry
        super().__init__(
            "mutant-json: unexpected entry format, iterator must return an entry "
            f"[pointer: str, value: any], got {entry!r}"
        )


class UnknownOperation(MutantJsonError):
    """A patch request names an operation outside the recognized set.

    Attributes:
        op: The operation as supplied by the callback.
    """

    code = "unknown_operation"

    def __init__(self, op: Any) -> None:
        self.op = op
        super().__init__(f'mutant-json: unexpected patch operation "{op}"')


class MalformedPointer(MutantJsonError):
    """A non-empty ``path`` or ``from`` pointer does not start with ``/``.

    Attributes:
        pointer: The rejected pointer.
    """

    code = "malformed_pointer"

    def __init__(self, pointer: Any) -> None:
        self.pointer = pointer
        super().__init__(
            f'mutant-json: JSON pointer must start with a slash "/" (or be an empty string), got {pointer!r}'
        )
