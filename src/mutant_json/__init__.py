"""mutant-json: walk a document, let a callback patch entries as they are
visited, and continue the walk inside the patched structure.  Awaitable
values are resolved transparently.
"""

from .core import TraversalDriver, TraversalOptions
from .errors import (
    MalformedEntry,
    MalformedPointer,
    MissingProcessCallback,
    MutantJsonError,
    UnknownOperation,
)
from .factory import build_driver, build_options, transform
from .iterators import IteratorAdapter, Pull, ResumeHint, TraverseIterator, compile_filter
from .mutation import MutationBridge, Mutator, Outcome
from .patcher import apply_operation, detached_copy
from .patches import ALL_OPERATIONS, MISSING, PatchOp, PatchRequest, normalize_patch, normalize_patches
from .resolvers.pointer import escape, join, tap, unescape

__all__ = [
    "ALL_OPERATIONS",
    "IteratorAdapter",
    "MISSING",
    "MalformedEntry",
    "MalformedPointer",
    "MissingProcessCallback",
    "MutantJsonError",
    "MutationBridge",
    "Mutator",
    "Outcome",
    "PatchOp",
    "PatchRequest",
    "Pull",
    "ResumeHint",
    "TraversalDriver",
    "TraversalOptions",
    "TraverseIterator",
    "apply_operation",
    "build_driver",
    "build_options",
    "compile_filter",
    "detached_copy",
    "escape",
    "join",
    "normalize_patch",
    "normalize_patches",
    "tap",
    "transform",
    "unescape",
]
