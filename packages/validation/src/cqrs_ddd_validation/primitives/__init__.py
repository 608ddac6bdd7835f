"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    ContextFailure,
    CQRSDDDError,
    DefinitionError,
    RuleDefinitionError,
    ValidationFailedError,
)

__all__ = [
    "CQRSDDDError",
    "ConfigurationError",
    "ContextFailure",
    "DefinitionError",
    "RuleDefinitionError",
    "ValidationFailedError",
]
