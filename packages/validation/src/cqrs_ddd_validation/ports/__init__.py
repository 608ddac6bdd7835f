"""Ports: protocols the validation engine depends on."""

from __future__ import annotations

from .context import IValidationContext
from .middleware import IMiddleware

__all__ = [
    "IMiddleware",
    "IValidationContext",
]
