"""Small helpers for values that may be callables or awaitables."""

from __future__ import annotations

import inspect
from typing import Any


def resolve(value: Any, *args: Any) -> Any:
    """Call value with args when it is callable, otherwise return it unchanged."""

    return value(*args) if callable(value) else value


async def maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
