import re
import threading

import pytest

from cqrs_ddd_validation.primitives.exceptions import RuleDefinitionError
from cqrs_ddd_validation.validation.rules import (
    NESTED_KEY,
    AttributeRuleBuilder,
    RuleRegistry,
    RuleSet,
    build_attribute_rules,
    normalize_rules,
)

# --- Normalisation ---


def test_normalize_shorthand_forms() -> None:
    rules = normalize_rules(
        {"presence": True, "format": r"@", "inclusion": ["a", "b"], "numeric": True}
    )

    assert rules["presence"] is True
    assert rules["format"]["with"] == r"@"
    assert rules["inclusion"]["in"] == ["a", "b"]
    assert rules["numericality"] is True


def test_normalize_keeps_disabled_rules() -> None:
    assert normalize_rules({"presence": False, "format": None}) == {
        "presence": False,
        "format": False,
    }


@pytest.mark.parametrize(
    "rules",
    [
        {"uniqueness": True},
        {"length": 5},
        {"length": {"min": 1}},
        {"inclusion": "abc"},
        {"inclusion": {"message": "x"}},
        {"format": {"message": "no pattern"}},
        {"format": "("},
        {"numericality": {"bigger_than": 1}},
        {"presence": "yes"},
    ],
)
def test_invalid_rule_definitions_fail_fast(rules: dict[str, object]) -> None:
    with pytest.raises(RuleDefinitionError):
        normalize_rules(rules)


def test_format_accepts_compiled_pattern() -> None:
    pattern = re.compile(r"\d+")
    assert normalize_rules({"format": pattern})["format"]["with"] is pattern


# --- Attribute rules ---


def test_builder_collects_and_merges_attributes() -> None:
    builder = AttributeRuleBuilder()
    builder.attribute("name", presence=True).attribute("age", numeric=True)
    builder.attribute("name", length={"maximum": 10})

    built = builder.build()

    assert list(built) == ["name", "age"]
    assert built["name"]["presence"] is True
    assert built["name"]["length"]["maximum"] == 10
    assert built["age"]["numericality"] is True


def test_build_attribute_rules_from_mapping_and_callable() -> None:
    from_mapping = build_attribute_rules({"title": {"presence": True}, "note": None})
    from_callable = build_attribute_rules(
        lambda a: (a.attribute("title", presence=True), a.attribute("note"))
    )

    assert dict(from_mapping["title"]) == dict(from_callable["title"])
    assert dict(from_mapping["note"]) == {}
    assert dict(from_callable["note"]) == {}


def test_build_attribute_rules_rejects_other_values() -> None:
    with pytest.raises(RuleDefinitionError):
        build_attribute_rules(["title"])  # type: ignore[arg-type]


# --- RuleSet ---


def test_rule_set_parameters_are_idempotent_and_ordered() -> None:
    rule_set = RuleSet().with_parameters("a", "b").with_parameters("b", "c", "a")
    assert rule_set.parameters == ("a", "b", "c")


def test_rule_set_merges_at_rule_type_level() -> None:
    rule_set = (
        RuleSet()
        .with_rules("email", {"presence": True})
        .with_rules("email", {"format": {"with": "@"}})
        .with_rules("email", {"presence": {"message": "required"}})
    )

    rules = rule_set.rules["email"]
    assert rules["presence"] == {"message": "required"}
    assert rules["format"] == {"with": "@"}


def test_rule_set_is_never_mutated_in_place() -> None:
    original = RuleSet().with_rules("a", {"presence": True})

    original.with_rules("b", {"presence": True})

    assert list(original.rules) == ["a"]


def test_rule_set_stores_nested_rules_beside_siblings() -> None:
    nested = build_attribute_rules({"name": {"presence": True}})
    rule_set = RuleSet().with_rules("user", {"presence": True}, nested)

    assert rule_set.rules["user"]["presence"] is True
    assert rule_set.rules["user"][NESTED_KEY] is nested


# --- Registry ---


class Base:
    pass


class Child(Base):
    pass


def test_registry_unregistered_class_sees_nearest_ancestor() -> None:
    registry = RuleRegistry()
    registry.declare_rule(Base, "x", {"presence": True})

    assert "x" in registry.rule_set(Child)


def test_registry_snapshot_inheritance() -> None:
    registry = RuleRegistry()

    class Parent:
        pass

    registry.declare_rule(Parent, "x", {"presence": True})

    class Sub(Parent):
        pass

    registry.inherit(Sub)
    registry.declare_rule(Sub, "y", {"presence": True})
    registry.declare_rule(Parent, "z", {"presence": True})

    assert list(registry.rule_set(Parent).rules) == ["x", "z"]
    assert list(registry.rule_set(Sub).rules) == ["x", "y"]


def test_registry_config_override_is_copied_on_write() -> None:
    registry = RuleRegistry()

    class Parent:
        pass

    class Sub(Parent):
        pass

    registry.update_config(Parent, lambda c: setattr(c, "halt", True))
    registry.inherit(Sub)
    registry.update_config(Sub, lambda c: setattr(c, "error_mode", "code"))

    parent_config = registry.config_override(Parent)
    sub_config = registry.config_override(Sub)
    assert parent_config is not None
    assert sub_config is not None
    assert parent_config.model_fields_set == {"halt"}
    assert sub_config.model_fields_set == {"halt", "error_mode"}


def test_registry_snapshots_absent_config_override() -> None:
    registry = RuleRegistry()

    class Parent:
        pass

    class Sub(Parent):
        pass

    registry.inherit(Sub)
    registry.update_config(Parent, lambda c: setattr(c, "halt", True))

    assert registry.config_override(Parent) is not None
    assert registry.config_override(Sub) is None


def test_registry_concurrent_registration() -> None:
    registry = RuleRegistry()

    class Target:
        pass

    def declare(index: int) -> None:
        registry.declare_rule(Target, f"param_{index}", {"presence": True})

    threads = [threading.Thread(target=declare, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.rule_set(Target)) == 20


def test_registry_clear() -> None:
    registry = RuleRegistry()
    registry.declare_rule(Base, "x", {"presence": True})

    registry.clear(Base)

    assert len(registry.rule_set(Base)) == 0
