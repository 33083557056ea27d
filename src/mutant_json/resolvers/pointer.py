"""Read-only JSON Pointer lookup.

``tap`` never raises for a missing path: absence is reported through the
caller's *default*.  Tokens follow RFC 6901 escaping (``~0`` for ``~`` and
``~1`` for ``/``), the same convention the default iterator uses when it
builds pointers and the one ``jsonpatch`` expects.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

SEPARATOR = "/"


def escape(token: Any) -> str:
    """Encode a single key as a pointer token (``~`` first, then ``/``)."""
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape(token: str) -> str:
    """Decode a single pointer token (``~1`` first, then ``~0``)."""
    return token.replace("~1", "/").replace("~0", "~")


def join(parent: str, key: Any) -> str:
    """Append *key* to the *parent* pointer.

    ::

        join("", "a")      → "/a"
        join("/a", 0)      → "/a/0"
        join("/a", "b/c")  → "/a/b~1c"
    """
    return f"{parent}{SEPARATOR}{escape(key)}"


def tap(document: Any, pointer: str, default: Any = None) -> Any:
    """Return the value at *pointer* inside *document*, or *default*.

    Examples::

        tap({"a": {"b": 0}}, "/a/b")        → 0
        tap({"a": {"b": 0}}, "/a/x", 7)     → 7
        tap({"a": [1, 2]}, "/a/1")          → 2
        tap({"a": 1}, "")                   → {"a": 1}
        tap({"a": 1}, "/a/b", None)         → None   # 1 is not a container

    Values that are present but falsy (``0``, ``""``, ``None``) are returned
    as found; only a genuinely missing segment substitutes *default*.
    """
    if pointer == "":
        return document

    tokens = pointer.split(SEPARATOR)
    if tokens[0] == "":
        tokens = tokens[1:]

    current = document
    for raw in tokens:
        key = unescape(raw)
        if isinstance(current, Mapping):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not key.isdecimal() or int(key) >= len(current):
                return default
            current = current[int(key)]
        else:
            return default
    return current
