"""ValidatorMiddleware — runs declared parameter rules before dispatch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware
from ..primitives.exceptions import ValidationFailedError
from ..validation.runner import ValidationRunner

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cqrs_ddd.middleware")


class MessageContext:
    """Adapts a message object (or mapping) to ``IValidationContext``.

    Reads parameters as attributes (or keys); ``fail`` raises
    :class:`ValidationFailedError`.
    """

    def __init__(self, message: Any) -> None:
        self._message = message

    def get(self, name: str) -> Any:
        if isinstance(self._message, Mapping):
            return self._message.get(name)
        return getattr(self._message, name, None)

    def fail(self, errors: list[dict[str, Any]]) -> None:
        raise ValidationFailedError(errors)


class ValidatorMiddleware(IMiddleware):
    """Validates the message's declared parameters before the handler.

    Rules come from the message class (declared through
    :class:`~cqrs_ddd_validation.validation.mixin.ParamValidationMixin`);
    messages without rules pass straight through. A ``custom_validate``
    method on the message is used as the custom hook.

    If validation fails, raises ValidationFailedError.
    """

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        """Validate the message before passing to next handler."""
        runner = ValidationRunner.for_command(type(message))
        if runner.rule_set.rules:
            hook = getattr(message, "custom_validate", None)
            try:
                runner.run(
                    MessageContext(message),
                    custom_hook=hook if callable(hook) else None,
                )
            except ValidationFailedError:
                logger.info("Rejected %s", type(message).__name__)
                raise
        return await next_handler(message)
