"""Middleware: pipeline integration of the validation engine."""

from __future__ import annotations

from .validation import MessageContext, ValidatorMiddleware

__all__ = [
    "MessageContext",
    "ValidatorMiddleware",
]
