"""IMiddleware — pipeline middleware protocol."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@runtime_checkable
class IMiddleware(Protocol):
    """Protocol for middleware wrapping command dispatch.

    A middleware receives the message and the rest of the chain; it may
    reject the message (raise) or pass it on by awaiting ``next_handler``.
    """

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        """Run middleware logic, then await *next_handler* to proceed."""
        ...
