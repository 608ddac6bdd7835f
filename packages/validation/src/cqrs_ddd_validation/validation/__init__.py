"""Validation engine: rules, validators, error collection and formatting."""

from __future__ import annotations

from .configuration import (
    Configuration,
    ErrorMode,
    configure,
    get_configuration,
    reset_configuration,
)
from .errors import ErrorCollector, ValidationError
from .formatting import format_errors, humanize
from .mixin import ParamValidationMixin
from .nested import NestedValidator
from .rules import AttributeRuleBuilder, RuleRegistry, RuleSet, get_rule_registry
from .runner import ValidationRunner
from .validators import is_blank

__all__ = [
    "AttributeRuleBuilder",
    "Configuration",
    "ErrorCollector",
    "ErrorMode",
    "NestedValidator",
    "ParamValidationMixin",
    "RuleRegistry",
    "RuleSet",
    "ValidationError",
    "ValidationRunner",
    "configure",
    "format_errors",
    "get_configuration",
    "get_rule_registry",
    "humanize",
    "is_blank",
    "reset_configuration",
]
