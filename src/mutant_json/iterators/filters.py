"""Entry filters for the default iterator's ``test`` option.

Accepted forms::

    "*/nested"                 glob (fnmatch syntax, ``*`` also crosses ``/``)
    regex.compile(r"/\\d+$")    compiled pattern, searched against the pointer
    re.compile(r"^/a")         stdlib patterns work the same way
    lambda pointer, value: …   predicate

``None`` / ``False`` mean "no filter".
"""

from __future__ import annotations

import fnmatch
import re
from typing import Any, Callable, Optional

import regex

EntryFilter = Callable[[str, Any], bool]

_PATTERN_TYPES = (regex.Pattern, re.Pattern)


def compile_filter(test: Any) -> Optional[EntryFilter]:
    """Turn a ``test`` option into a ``(pointer, value) -> bool`` predicate."""
    if test is None or test is False:
        return None

    if isinstance(test, _PATTERN_TYPES):
        return lambda pointer, value: test.search(pointer) is not None

    if isinstance(test, str):
        pattern = regex.compile(fnmatch.translate(test))
        return lambda pointer, value: pattern.match(pointer) is not None

    if callable(test):
        return lambda pointer, value: bool(test(pointer, value))

    raise TypeError(f"mutant-json: unsupported entry filter {test!r}")
