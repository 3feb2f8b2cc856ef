"""Small async helpers."""

import inspect
from typing import Any


async def ensure_thunk_call(value: Any, *args: Any) -> Any:
    """Resolve a value that may be given lazily.

    ``value`` may be a plain value, a callable returning one, or a callable
    returning an awaitable. Callables receive ``args``.
    """
    if callable(value):
        value = value(*args)
    if inspect.isawaitable(value):
        value = await value
    return value
