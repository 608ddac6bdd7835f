"""ValidationError records and the ErrorCollector that accumulates them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


def default_options_factory() -> dict[str, Any]:
    """Factory for the mutable ``options`` dict of a ValidationError."""
    return {}


@dataclass(frozen=True)
class ValidationError:
    """A single rule failure.

    ``attribute`` is the parameter name or a nested path such as
    ``"user.name"`` or ``"items[2].price"``. ``message`` is the custom
    message when one was given (``custom`` is then set), otherwise the
    string form of ``type``; the formatter turns it into human text or a
    code later.
    """

    attribute: str
    type: str = "invalid"
    message: str = "invalid"
    options: dict[str, Any] = field(default_factory=default_options_factory)
    custom: bool = False

    @property
    def has_custom_message(self) -> bool:
        return self.custom


class ErrorCollector:
    """Ordered collection of :class:`ValidationError` with a halt flag.

    Usage::

        errors = ErrorCollector()
        errors.add("email", "blank")
        errors.add("token", "expired", message="has expired", halt=True)
        errors.halted  # True

    ``halt=True`` never interrupts the caller; it sets :attr:`halted`,
    which the runner polls after each validator. Once halted, later
    ``add`` calls are dropped.
    """

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []
        self._halted = False

    def add(
        self,
        attribute: str,
        type: str = "invalid",  # noqa: A002
        message: str | None = None,
        *,
        halt: bool = False,
        **options: Any,
    ) -> None:
        """Append an error for *attribute*; ``halt=True`` requests a stop."""
        if self._halted:
            logger.debug("Dropping error on %s after halt", attribute)
            return
        type_name = str(type)
        self._errors.append(
            ValidationError(
                attribute=str(attribute),
                type=type_name,
                message=message if message is not None else type_name,
                options=options,
                custom=message is not None,
            )
        )
        if halt:
            self._halted = True

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def empty(self) -> bool:
        return not self._errors

    @property
    def any(self) -> bool:
        return bool(self._errors)

    def clear(self) -> None:
        """Reset to empty and lift any halt request."""
        self._errors.clear()
        self._halted = False

    def to_list(self) -> list[ValidationError]:
        return list(self._errors)

    def for_attribute(self, attribute: str) -> list[ValidationError]:
        """Return the errors recorded against exactly *attribute*."""
        return [e for e in self._errors if e.attribute == attribute]

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(list(self._errors))

    def __bool__(self) -> bool:
        return self.any

    def __repr__(self) -> str:
        return f"ErrorCollector({self._errors!r}, halted={self._halted})"
