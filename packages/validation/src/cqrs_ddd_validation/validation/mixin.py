"""ParamValidationMixin — the declarative surface for command authors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .configuration import get_configuration
from .errors import ErrorCollector
from .rules import get_rule_registry
from .runner import ValidationRunner

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ..ports.context import IValidationContext
    from .configuration import Configuration
    from .rules import AttributeRuleBuilder, RuleSet

VALIDATION_HOOK = "validate_params"


class ParamValidationMixin:
    """Adds declared-parameter validation to a command class.

    Put it before the command base so its ``__init_subclass__`` runs on
    every subclass::

        class CreateUser(ParamValidationMixin, Interactor):
            def execute(self) -> None: ...

        CreateUser.declare_parameters("email", "age", "address")
        CreateUser.validates("email", presence=True, format=r"@")
        CreateUser.validates("age", numericality={"greater_than": 0})
        CreateUser.validates(
            "address",
            attributes=lambda a: a.attribute("city", presence=True),
        )
        CreateUser.configure_validation(error_mode="code")

    Subclasses start from a snapshot of their parent's rules and config;
    later changes on either side stay on that side. If the command base
    offers ``before_run(hook_name)``, :meth:`validate_params` is registered
    there so it runs before the main action.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        get_rule_registry().inherit(cls)
        before_run = getattr(cls, "before_run", None)
        if callable(before_run):
            before_run(VALIDATION_HOOK)

    # ── Declarations ─────────────────────────────────────────────

    @classmethod
    def declare_parameters(cls, *names: str) -> None:
        """Register parameter names; declaring a name twice is a no-op.

        Bookkeeping only: validation runs over the parameters that have
        rules. Declared names without rules are logged at debug level.
        """
        get_rule_registry().declare_parameters(cls, *names)

    @classmethod
    def validates(
        cls,
        param_name: str,
        attributes: Mapping[str, Mapping[str, Any]]
        | Callable[[AttributeRuleBuilder], Any]
        | None = None,
        **rules: Any,
    ) -> None:
        """Attach rules to *param_name*, merging with earlier declarations.

        ``attributes`` adds nested rules for hash/array values, either as
        ``{"name": {"presence": True}}`` or as a callable receiving an
        :class:`~.rules.AttributeRuleBuilder`.
        """
        get_rule_registry().declare_rule(cls, param_name, rules, attributes)

    @classmethod
    def configure_validation(
        cls,
        fn: Callable[[Configuration], Any] | None = None,
        **options: Any,
    ) -> Configuration:
        """Set per-class overrides of the global configuration."""

        def apply(config: Configuration) -> None:
            if options:
                config.apply(**options)
            if fn is not None:
                fn(config)

        return get_rule_registry().update_config(cls, apply)

    @classmethod
    def validation_rules(cls) -> RuleSet:
        return get_rule_registry().rule_set(cls)

    @classmethod
    def validation_config(cls) -> Configuration:
        """The effective configuration: class override over the global default."""
        return get_configuration().resolve(get_rule_registry().config_override(cls))

    # ── Instance side ────────────────────────────────────────────

    @property
    def errors(self) -> ErrorCollector:
        """Errors from the latest validation run of this instance."""
        return vars(self).setdefault("_validation_errors", ErrorCollector())

    def custom_validate(self, errors: ErrorCollector) -> None:  # noqa: B027
        """Override to add checks that span parameters; runs after the rules."""

    def validation_context(self) -> IValidationContext:
        return self.context  # type: ignore[attr-defined,no-any-return]

    def validate_params(self) -> list[dict[str, Any]]:
        """Run the declared rules; on failure the context's ``fail`` is called."""
        runner = ValidationRunner.for_command(type(self))
        return runner.run(
            self.validation_context(), self.errors, self.custom_validate
        )
