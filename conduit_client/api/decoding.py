"""Turns wire-shape mismatches into client errors."""

import functools
from typing import Any, Awaitable, Callable, TypeVar

from conduit_client.errors import ResponseFormatError

T = TypeVar("T")


def decodes_response(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Wrap an endpoint so a reply missing its envelope or fields raises
    ResponseFormatError instead of a bare KeyError or TypeError."""

    @functools.wraps(method)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        pending = method(*args, **kwargs)
        try:
            return await pending
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ResponseFormatError(
                f"{method.__qualname__}: unexpected response shape ({e!r})"
            ) from e

    return wrapper


__all__ = ["decodes_response"]
