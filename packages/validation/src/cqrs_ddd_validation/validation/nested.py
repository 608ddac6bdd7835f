"""NestedValidator — attribute rules applied inside hash and array parameters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .rules import rule_enabled
from .validators import VALIDATORS, is_blank, validate_boolean, validate_presence

if TYPE_CHECKING:
    from .errors import ErrorCollector

_MISSING = object()

# Rules that only run once the attribute value is present (or False).
_VALUE_RULES = ("format", "length", "inclusion", "numericality")


class NestedValidator:
    """Validates one level of attributes under a single parameter.

    - mapping: ``param.attr`` paths
    - list/tuple: every element must be a mapping, ``param[i].attr`` paths,
      capped at ``max_array_size`` elements
    - anything else: one ``invalid_type`` error on the parameter

    Deeper structures are not descended into.
    """

    def __init__(
        self,
        attribute_rules: Mapping[str, Mapping[str, Any]],
        *,
        max_array_size: int | None = None,
    ) -> None:
        self._attribute_rules = attribute_rules
        self._max_array_size = max_array_size

    def validate(self, errors: ErrorCollector, param_name: str, value: Any) -> None:
        if isinstance(value, Mapping):
            self._validate_item(errors, param_name, value)
        elif isinstance(value, (list, tuple)):
            self._validate_array(errors, param_name, value)
        else:
            errors.add(param_name, "invalid_type")

    def _validate_array(
        self, errors: ErrorCollector, param_name: str, items: list[Any] | tuple[Any, ...]
    ) -> None:
        limit = self._max_array_size
        if limit is not None and len(items) > limit:
            errors.add(param_name, "too_large", count=limit)
            return
        for index, item in enumerate(items):
            if errors.halted:
                return
            prefix = f"{param_name}[{index}]"
            if not isinstance(item, Mapping):
                errors.add(prefix, "invalid_type")
                continue
            self._validate_item(errors, prefix, item)

    def _validate_item(
        self, errors: ErrorCollector, prefix: str, item: Mapping[Any, Any]
    ) -> None:
        for attr, rules in self._attribute_rules.items():
            if errors.halted:
                return
            self._validate_attribute(
                errors, f"{prefix}.{attr}", lookup(item, attr), rules
            )

    def _validate_attribute(
        self,
        errors: ErrorCollector,
        path: str,
        raw: Any,
        rules: Mapping[str, Any],
    ) -> None:
        value = None if raw is _MISSING else raw

        if rule_enabled(rules.get("presence")):
            validate_presence(errors, path, value, rules["presence"])
            if errors.halted:
                return

        # A key that is absent is not checked for booleanness.
        if rule_enabled(rules.get("boolean")) and raw is not _MISSING:
            validate_boolean(errors, path, value, rules["boolean"])
            if errors.halted:
                return

        if is_blank(value):
            return
        for rule_type in _VALUE_RULES:
            config = rules.get(rule_type)
            if not rule_enabled(config):
                continue
            VALIDATORS[rule_type](errors, path, value, config)
            if errors.halted:
                return


def lookup(item: Mapping[Any, Any], attr: str) -> Any:
    """Return ``item[attr]``, or the ``_MISSING`` sentinel when the key is absent."""
    return item.get(attr, _MISSING)
