"""Configuration — halt behaviour and error-output mode.

One process-wide default plus optional per-class overrides (stored in the
:class:`~.rules.RuleRegistry`). An override only wins for the fields that
were explicitly set on it; everything else falls through to the default.

The default is mutable at runtime without synchronisation: reconfiguring it
while other threads are validating is last-write-wins. Prefer per-class
overrides set at class-definition time when that matters.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

from ..primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_ARRAY_SIZE = 1000


class ErrorMode(str, Enum):
    """Output shape of reported errors."""

    DEFAULT = "default"
    CODE = "code"


class Configuration(BaseModel):
    """Validation settings.

    - ``error_mode``: ``"default"`` for ``{attribute, type, message}`` dicts,
      ``"code"`` for ``{code}`` dicts.
    - ``halt``: stop validating further parameters once one has failed.
    - ``skip_validate``: skip the ``custom_validate`` hook when parameter
      validation already failed.
    - ``max_array_size``: largest array accepted for nested validation
      (``None`` disables the cap).

    Invalid values raise :class:`ConfigurationError` on construction and on
    assignment.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    error_mode: ErrorMode = ErrorMode.DEFAULT
    halt: bool = False
    skip_validate: bool = True
    max_array_size: int | None = DEFAULT_MAX_ARRAY_SIZE

    @field_validator("error_mode", mode="before")
    @classmethod
    def _check_error_mode(cls, value: Any) -> ErrorMode:
        if isinstance(value, ErrorMode):
            return value
        try:
            return ErrorMode(str(value))
        except ValueError:
            allowed = ", ".join(repr(m.value) for m in ErrorMode)
            msg = f"Invalid error_mode {value!r}; expected one of {allowed}"
            raise ConfigurationError(msg) from None

    @field_validator("max_array_size", mode="before")
    @classmethod
    def _check_max_array_size(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            msg = f"max_array_size must be a non-negative int or None, got {value!r}"
            raise ConfigurationError(msg)
        return value

    # ── Aliases ──────────────────────────────────────────────────

    @property
    def halt_on_first_error(self) -> bool:
        """Older name for :attr:`halt`."""
        return self.halt

    @halt_on_first_error.setter
    def halt_on_first_error(self, value: bool) -> None:
        self.halt = value

    # ── Resolution ───────────────────────────────────────────────

    def resolve(self, override: Configuration | None) -> Configuration:
        """Return this configuration with *override*'s explicitly-set fields applied."""
        if override is None:
            return self
        updates = {name: getattr(override, name) for name in override.model_fields_set}
        if not updates:
            return self
        return self.model_copy(update=updates)

    def apply(self, **options: Any) -> Configuration:
        """Set several options at once; unknown names raise ConfigurationError."""
        unknown = set(options) - set(type(self).model_fields) - {"halt_on_first_error"}
        if unknown:
            msg = f"Unknown configuration options: {sorted(unknown)}"
            raise ConfigurationError(msg)
        for name, value in options.items():
            setattr(self, name, value)
        return self


# ── Process-wide default ─────────────────────────────────────────

_configuration = Configuration()


def get_configuration() -> Configuration:
    return _configuration


def configure(
    fn: Callable[[Configuration], Any] | None = None, **options: Any
) -> Configuration:
    """Mutate the process-wide default.

    Usage::

        configure(error_mode="code")

        configure(lambda config: config.apply(halt=True))
    """
    if options:
        _configuration.apply(**options)
    if fn is not None:
        fn(_configuration)
    logger.debug("Global validation config: %s", _configuration.model_dump())
    return _configuration


def reset_configuration() -> Configuration:
    """Restore the process-wide default to its initial values."""
    global _configuration  # noqa: PLW0603
    _configuration = Configuration()
    return _configuration
