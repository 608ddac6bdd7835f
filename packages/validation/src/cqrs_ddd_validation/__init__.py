"""cqrs-ddd-validation — declarative parameter validation for command objects.

Declare parameters and rules on a command class, and the rules run before
the command's main action; failures are collected and reported as
human-readable messages or machine codes.
"""

from __future__ import annotations

# ── Interactor ───────────────────────────────────────────────────
from .interactor import Context, Interactor

# ── Middleware ───────────────────────────────────────────────────
from .middleware import MessageContext, ValidatorMiddleware

# ── Ports ────────────────────────────────────────────────────────
from .ports import IMiddleware, IValidationContext

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    ConfigurationError,
    ContextFailure,
    CQRSDDDError,
    DefinitionError,
    RuleDefinitionError,
    ValidationFailedError,
)

# ── Validation ──────────────────────────────────────────────────
from .validation import (
    AttributeRuleBuilder,
    Configuration,
    ErrorCollector,
    ErrorMode,
    NestedValidator,
    ParamValidationMixin,
    RuleRegistry,
    RuleSet,
    ValidationError,
    ValidationRunner,
    configure,
    format_errors,
    get_configuration,
    get_rule_registry,
    humanize,
    is_blank,
    reset_configuration,
)

__all__: list[str] = [
    # Interactor
    "Context",
    "Interactor",
    # Middleware
    "MessageContext",
    "ValidatorMiddleware",
    # Ports
    "IMiddleware",
    "IValidationContext",
    # Validation
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
    # Primitives
    "CQRSDDDError",
    "ConfigurationError",
    "ContextFailure",
    "DefinitionError",
    "RuleDefinitionError",
    "ValidationFailedError",
]
