"""IValidationContext — what the rule engine needs from a command context."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IValidationContext(Protocol):
    """Key/value view of a command's inputs plus a failure signal.

    The engine only ever reads declared parameter values and, when errors
    were collected, hands the formatted list back through :meth:`fail`.
    Implementations:

    - :class:`~cqrs_ddd_validation.interactor.context.Context` for
      interactors (``fail`` unwinds the run).
    - :class:`~cqrs_ddd_validation.middleware.validation.MessageContext`
      for pipeline messages (``fail`` raises ``ValidationFailedError``).
    """

    def get(self, name: str) -> Any:
        """Return the value stored under *name*, or ``None`` if it was never set.

        Must not raise for unknown names.
        """
        ...

    def fail(self, errors: list[dict[str, Any]]) -> Any:
        """Signal that validation failed with the formatted *errors*.

        Must prevent the command's main action from running.
        """
        ...
