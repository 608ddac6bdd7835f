"""Minimal interactor lifecycle the validation mixin plugs into."""

from __future__ import annotations

from .base import Interactor
from .context import Context

__all__ = [
    "Context",
    "Interactor",
]
