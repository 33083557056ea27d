"""Public entry points: option assembly and ``transform``.

``transform`` is the recommended entry point::

    transform({"a": 0, "b": 1}, lambda mutate, value, pointer, doc: mutate({"value": value + 1}))
    → {"a": 1, "b": 2}

Options may be passed as a ``TraversalOptions``, as a mapping, as keyword
arguments, or any mix; keyword arguments win.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Mapping, Optional, Union

from .core import TraversalDriver, TraversalOptions
from .errors import MissingProcessCallback

OptionsLike = Union[TraversalOptions, Mapping[str, Any], None]


def build_options(options: OptionsLike = None, **overrides: Any) -> TraversalOptions:
    """Merge *options* and *overrides* into a ``TraversalOptions``.

    Unknown option names raise ``TypeError``.
    """
    if options is None:
        base = TraversalOptions()
    elif isinstance(options, TraversalOptions):
        base = options
    elif isinstance(options, Mapping):
        base = TraversalOptions(**options)
    else:
        raise TypeError(f"mutant-json: options must be a mapping or TraversalOptions, got {type(options).__name__}")
    return replace(base, **overrides) if overrides else base


def build_driver(options: OptionsLike = None, **overrides: Any) -> TraversalDriver:
    """Assemble a ``TraversalDriver`` for repeated ``run`` calls.

    A driver built with an explicit ``iterator`` consumes it on the first run.
    """
    return TraversalDriver(build_options(options, **overrides))


def transform(
        document: Any,
        callback: Callable[..., Any],
        options: OptionsLike = None,
        **overrides: Any,
) -> Any:
    """Walk *document*, let *callback* patch entries, return the new document.

    Returns the document directly when nothing awaitable was met (and
    ``force_async`` is off); otherwise returns a coroutine to ``await``.
    """
    if not callable(callback):
        raise MissingProcessCallback(callback)
    return build_driver(options, **overrides).run(document, callback)
