"""Exceptions for cqrs-ddd-validation."""

from __future__ import annotations

from typing import Any


class CQRSDDDError(Exception):
    """Root exception for the entire cqrs-ddd toolkit."""


class DefinitionError(CQRSDDDError):
    """Base class for programmer errors detected at declaration time."""


class ConfigurationError(DefinitionError):
    """Raised when a validation configuration value is invalid.

    Usage: ``Configuration`` raises this for an unknown ``error_mode``, a
    negative ``max_array_size`` or an unknown option name.
    """


class RuleDefinitionError(DefinitionError):
    """Raised when ``validates`` is given a rule it cannot apply.

    Usage: unknown rule types, a non-mapping ``length`` config, an
    ``inclusion`` rule without a collection, or a pattern that does not
    compile.
    """


class ValidationFailedError(CQRSDDDError):
    """Raised by ``ValidatorMiddleware`` when parameter validation fails.

    Carries the formatted error list, in the shape selected by the
    effective ``error_mode``.
    """

    def __init__(self, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors: list[dict[str, Any]] = list(errors or [])
        super().__init__(str(self.errors))


class ContextFailure(CQRSDDDError):  # noqa: N818
    """Unwinds an interactor run after ``Context.fail()``.

    Caught by :meth:`~cqrs_ddd_validation.interactor.base.Interactor.call`;
    callers inspect the returned context instead.
    """

    def __init__(self, context: Any) -> None:
        self.context = context
        super().__init__("Interactor context failed")
