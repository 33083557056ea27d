"""Entry sources sub-package.

adapter  - ``IteratorAdapter``: one ``pull(hint)`` over sequences and iterators
traverse - ``TraverseIterator``: the default resumable tree walk
filters  - ``compile_filter``: the walk's ``test`` option
"""

from .adapter import IteratorAdapter, Pull, ResumeHint, check_entry
from .filters import EntryFilter, compile_filter
from .traverse import TraverseIterator, is_container

__all__ = [
    "EntryFilter",
    "IteratorAdapter",
    "Pull",
    "ResumeHint",
    "TraverseIterator",
    "check_entry",
    "compile_filter",
    "is_container",
]
