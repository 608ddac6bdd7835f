"""RuleSet and RuleRegistry — class-level rule storage with copy-on-write.

Each command class owns one immutable :class:`RuleSet`. Declarations never
mutate a published RuleSet: they build a new one and swap it in under the
registry lock, so validation runs read rules without locking.
"""

from __future__ import annotations

import logging
import re
import threading
import weakref
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import RuleDefinitionError
from .validators import NUMERIC_CONSTRAINTS, compile_pattern

if TYPE_CHECKING:
    from collections.abc import Callable

    from .configuration import Configuration

logger = logging.getLogger(__name__)

NESTED_KEY = "_nested"

RULE_ALIASES = {"numeric": "numericality"}
RULE_TYPES = ("presence", "boolean", "format", "length", "inclusion", "numericality")

_LENGTH_OPTIONS = frozenset({"minimum", "maximum", "is", "message"})
_NUMERIC_OPTIONS = frozenset({name for name, _ in NUMERIC_CONSTRAINTS} | {"message"})


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


def rule_enabled(config: Any) -> bool:
    """``False``/``None`` switch a rule off; any other config applies it."""
    return config is not None and config is not False


# ── Normalisation ────────────────────────────────────────────────


def _normalize_flag(rule_type: str, config: Any) -> Any:
    if isinstance(config, (bool, Mapping)):
        return config
    msg = f"{rule_type} expects True or an options mapping, got {config!r}"
    raise RuleDefinitionError(msg)


def _normalize_format(config: Any) -> Mapping[str, Any]:
    options = dict(config) if isinstance(config, Mapping) else {"with": config}
    pattern = options.get("with")
    if isinstance(pattern, str):
        try:
            compile_pattern(pattern)
        except re.error as exc:
            msg = f"format pattern {pattern!r} does not compile: {exc}"
            raise RuleDefinitionError(msg) from exc
    elif not isinstance(pattern, re.Pattern):
        msg = f"format expects a pattern or {{'with': pattern}}, got {config!r}"
        raise RuleDefinitionError(msg)
    return MappingProxyType(options)


def _normalize_length(config: Any) -> Mapping[str, Any]:
    if not isinstance(config, Mapping):
        msg = f"length expects an options mapping, got {config!r}"
        raise RuleDefinitionError(msg)
    unknown = set(config) - _LENGTH_OPTIONS
    if unknown:
        msg = f"Unknown length options: {sorted(unknown)}"
        raise RuleDefinitionError(msg)
    return MappingProxyType(dict(config))


def _normalize_inclusion(config: Any) -> Mapping[str, Any]:
    options = dict(config) if isinstance(config, Mapping) else {"in": config}
    allowed = options.get("in")
    if isinstance(allowed, (str, bytes)) or not isinstance(allowed, Collection):
        msg = f"inclusion expects a collection or {{'in': collection}}, got {config!r}"
        raise RuleDefinitionError(msg)
    return MappingProxyType(options)


def _normalize_numericality(config: Any) -> Any:
    if isinstance(config, bool):
        return config
    if not isinstance(config, Mapping):
        msg = f"numericality expects True or an options mapping, got {config!r}"
        raise RuleDefinitionError(msg)
    unknown = set(config) - _NUMERIC_OPTIONS
    if unknown:
        msg = f"Unknown numericality options: {sorted(unknown)}"
        raise RuleDefinitionError(msg)
    return MappingProxyType(dict(config))


_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    "presence": lambda c: _normalize_flag("presence", c),
    "boolean": lambda c: _normalize_flag("boolean", c),
    "format": _normalize_format,
    "length": _normalize_length,
    "inclusion": _normalize_inclusion,
    "numericality": _normalize_numericality,
}


def normalize_rules(rules: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and canonicalise a ``{rule_type: config}`` mapping.

    ``None`` and ``False`` configs are kept as-is so that a later
    declaration can switch an inherited rule off.
    """
    normalized: dict[str, Any] = {}
    for raw_type, config in rules.items():
        rule_type = RULE_ALIASES.get(raw_type, raw_type)
        if rule_type not in _NORMALIZERS:
            msg = f"Unknown validation rule {raw_type!r}; expected one of {RULE_TYPES}"
            raise RuleDefinitionError(msg)
        if config is None or config is False:
            normalized[rule_type] = False
            continue
        normalized[rule_type] = _NORMALIZERS[rule_type](config)
    return normalized


# ── Nested attribute rules ───────────────────────────────────────


class AttributeRuleBuilder:
    """Collects ``attribute(name, **rules)`` calls for nested validation.

    Usage::

        CreateOrder.validates(
            "items",
            presence=True,
            attributes=lambda a: (
                a.attribute("sku", presence=True),
                a.attribute("quantity", numericality={"greater_than": 0}),
            ),
        )
    """

    def __init__(self) -> None:
        self._rules: dict[str, dict[str, Any]] = {}

    def attribute(self, name: str, **rules: Any) -> AttributeRuleBuilder:
        existing = self._rules.get(name, {})
        self._rules[name] = {**existing, **normalize_rules(rules)}
        return self

    def build(self) -> Mapping[str, Mapping[str, Any]]:
        return MappingProxyType(
            {name: MappingProxyType(dict(r)) for name, r in self._rules.items()}
        )


def build_attribute_rules(
    attributes: Mapping[str, Mapping[str, Any]]
    | Callable[[AttributeRuleBuilder], Any],
) -> Mapping[str, Mapping[str, Any]]:
    """Turn a builder callback or a plain ``{attr: rules}`` mapping into an AttributeRuleSet."""
    builder = AttributeRuleBuilder()
    if callable(attributes):
        attributes(builder)
    elif isinstance(attributes, Mapping):
        for name, rules in attributes.items():
            builder.attribute(str(name), **dict(rules or {}))
    else:
        msg = f"attributes expects a mapping or a builder callable, got {attributes!r}"
        raise RuleDefinitionError(msg)
    return builder.build()


# ── RuleSet ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class RuleSet:
    """Immutable snapshot of one command class's declarations.

    ``rules`` preserves declaration order, ancestors first; the runner
    validates parameters in that order.
    """

    parameters: tuple[str, ...] = ()
    rules: Mapping[str, Mapping[str, Any]] = field(default_factory=_empty_mapping)

    def with_parameters(self, *names: str) -> RuleSet:
        added = tuple(n for n in dict.fromkeys(names) if n not in self.parameters)
        if not added:
            return self
        return replace(self, parameters=self.parameters + added)

    def with_rules(
        self,
        param_name: str,
        rule_map: Mapping[str, Any],
        nested: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> RuleSet:
        merged = dict(self.rules.get(param_name, {}))
        merged.update(rule_map)
        if nested is not None:
            merged[NESTED_KEY] = nested
        rules = dict(self.rules)
        rules[param_name] = MappingProxyType(merged)
        return replace(self, rules=MappingProxyType(rules))

    def __contains__(self, param_name: object) -> bool:
        return param_name in self.rules

    def __len__(self) -> int:
        return len(self.rules)


# ── Registry ─────────────────────────────────────────────────────


class RuleRegistry:
    """Per-class storage of RuleSets and Configuration overrides.

    Keyed by class identity (weakly, so throwaway classes are collected).
    Writes take a process-wide lock and publish a fresh value; reads never
    lock. A class with no entry of its own sees its nearest registered
    ancestor's entry until :meth:`inherit` or its first write snapshots it.
    """

    def __init__(self) -> None:
        self._rule_sets: weakref.WeakKeyDictionary[type, RuleSet] = (
            weakref.WeakKeyDictionary()
        )
        # None marks a class that inherited "no override" at definition time.
        self._overrides: weakref.WeakKeyDictionary[type, Configuration | None] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.RLock()

    # ── Reads ────────────────────────────────────────────────────

    def rule_set(self, owner: type) -> RuleSet:
        for klass in owner.__mro__:
            found = self._rule_sets.get(klass)
            if found is not None:
                return found
        return RuleSet()

    def config_override(self, owner: type) -> Configuration | None:
        for klass in owner.__mro__:
            if klass in self._overrides:
                return self._overrides[klass]
        return None

    # ── Writes ───────────────────────────────────────────────────

    def inherit(self, child: type) -> None:
        """Snapshot the nearest ancestor's rules and config onto *child*."""
        with self._lock:
            parent_rules = self.rule_set(child)
            self._rule_sets[child] = parent_rules
            parent_config = self.config_override(child)
            self._overrides[child] = (
                parent_config.model_copy(deep=True)
                if parent_config is not None
                else None
            )
        logger.debug(
            "Inherited %d rule(s) for %s", len(parent_rules), child.__qualname__
        )

    def declare_parameters(self, owner: type, *names: str) -> RuleSet:
        with self._lock:
            updated = self.rule_set(owner).with_parameters(*names)
            self._rule_sets[owner] = updated
        return updated

    def declare_rule(
        self,
        owner: type,
        param_name: str,
        rule_type_map: Mapping[str, Any],
        nested: Mapping[str, Mapping[str, Any]]
        | Callable[[AttributeRuleBuilder], Any]
        | None = None,
    ) -> RuleSet:
        """Merge *rule_type_map* (and optional nested rules) into *param_name*'s rules."""
        normalized = normalize_rules(rule_type_map)
        attribute_rules = build_attribute_rules(nested) if nested is not None else None
        with self._lock:
            updated = self.rule_set(owner).with_rules(
                param_name, normalized, attribute_rules
            )
            self._rule_sets[owner] = updated
        logger.debug(
            "Registered rules %s on %s.%s",
            sorted(normalized) + ([NESTED_KEY] if attribute_rules else []),
            owner.__qualname__,
            param_name,
        )
        return updated

    def update_config(
        self, owner: type, apply: Callable[[Configuration], Any]
    ) -> Configuration:
        """Copy *owner*'s override (or start a blank one), apply, then publish."""
        from .configuration import Configuration

        with self._lock:
            current = self.config_override(owner)
            draft = (
                current.model_copy(deep=True) if current is not None else Configuration()
            )
            apply(draft)
            self._overrides[owner] = draft
        logger.debug("Updated validation config for %s", owner.__qualname__)
        return draft

    def clear(self, owner: type) -> None:
        """Drop *owner*'s own entries (testing utility)."""
        with self._lock:
            self._rule_sets.pop(owner, None)
            self._overrides.pop(owner, None)


_registry = RuleRegistry()


def get_rule_registry() -> RuleRegistry:
    return _registry
