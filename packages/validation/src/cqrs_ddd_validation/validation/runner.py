"""ValidationRunner — drives one validation pass for a command.

Flow::

    clear errors -> for each parameter (declaration order):
        read value -> presence, boolean, format, length, inclusion,
        numericality, nested
    -> custom hook (unless skipped) -> report or pass

Halting, in precedence order:

1. ``errors.add(..., halt=True)``: stops at once, even between two rule
   types of the same parameter. The custom hook does not run.
2. ``Configuration.halt``: the current parameter finishes, then no further
   parameters are validated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .configuration import get_configuration
from .errors import ErrorCollector
from .formatting import format_errors
from .nested import NestedValidator
from .rules import NESTED_KEY, get_rule_registry, rule_enabled
from .validators import VALIDATORS, is_blank

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ..ports.context import IValidationContext
    from .configuration import Configuration
    from .rules import RuleSet

logger = logging.getLogger("cqrs_ddd.validation")


class ValidationRunner:
    """Runs a :class:`~.rules.RuleSet` against a context under a Configuration."""

    def __init__(self, rule_set: RuleSet, config: Configuration) -> None:
        self.rule_set = rule_set
        self.config = config

    @classmethod
    def for_command(cls, owner: type) -> ValidationRunner:
        """Build a runner from *owner*'s registered rules and effective config."""
        registry = get_rule_registry()
        config = get_configuration().resolve(registry.config_override(owner))
        return cls(registry.rule_set(owner), config)

    # ── Entry point ──────────────────────────────────────────────

    def run(
        self,
        context: IValidationContext,
        errors: ErrorCollector | None = None,
        custom_hook: Callable[[ErrorCollector], Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Validate, then call ``context.fail(formatted)`` if anything failed.

        Returns the formatted errors (empty when validation passed). When
        ``context.fail`` unwinds (as interactor contexts do), nothing is
        returned.
        """
        if errors is None:
            errors = ErrorCollector()
        errors.clear()

        self.validate_params(context, errors)

        if custom_hook is not None and self._should_run_hook(errors):
            custom_hook(errors)

        if errors.empty:
            return []

        formatted = format_errors(errors, self.config.error_mode)
        logger.info(
            "Validation failed with %d error(s): %s",
            len(formatted),
            ", ".join(e.attribute for e in errors),
        )
        context.fail(formatted)
        return formatted

    def validate_params(
        self, context: IValidationContext, errors: ErrorCollector
    ) -> None:
        """Run every parameter's rules, honouring both halt levels."""
        unruled = [p for p in self.rule_set.parameters if p not in self.rule_set]
        if unruled:
            logger.debug("Declared parameters without rules: %s", ", ".join(unruled))
        for param_name, rules in self.rule_set.rules.items():
            self.validate_param(errors, param_name, context.get(param_name), rules)
            if errors.halted:
                logger.debug("Validation halted by %s", param_name)
                return
            if self.config.halt and errors.any:
                logger.debug("Validation halted after %s (halt=True)", param_name)
                return

    def validate_param(
        self,
        errors: ErrorCollector,
        param_name: str,
        value: Any,
        rules: Mapping[str, Any],
    ) -> None:
        for rule_type, validator in VALIDATORS.items():
            config = rules.get(rule_type)
            if not rule_enabled(config):
                continue
            validator(errors, param_name, value, config)
            if errors.halted:
                return

        attribute_rules = rules.get(NESTED_KEY)
        # The container's own rules decide whether an empty one is an error.
        if attribute_rules and not is_blank(value):
            NestedValidator(
                attribute_rules, max_array_size=self.config.max_array_size
            ).validate(errors, param_name, value)

    def _should_run_hook(self, errors: ErrorCollector) -> bool:
        if errors.halted:
            return False
        return not (self.config.skip_validate and errors.any)
