from cqrs_ddd_validation.validation.errors import ErrorCollector, ValidationError


def test_add_defaults_message_to_type() -> None:
    errors = ErrorCollector()

    errors.add("email", "blank")

    (error,) = errors.to_list()
    assert error == ValidationError(attribute="email", type="blank", message="blank")
    assert not error.has_custom_message


def test_add_keeps_custom_message_and_options() -> None:
    errors = ErrorCollector()

    errors.add("name", "too_short", message="too short", count=3, unit="characters")

    (error,) = errors.to_list()
    assert error.message == "too short"
    assert error.has_custom_message
    assert error.options == {"count": 3, "unit": "characters"}


def test_message_equal_to_type_is_still_custom() -> None:
    errors = ErrorCollector()

    errors.add("email", "blank", message="blank")

    (error,) = errors.to_list()
    assert error.has_custom_message


def test_default_type_is_invalid() -> None:
    errors = ErrorCollector()
    errors.add("code")
    assert errors.to_list()[0].type == "invalid"


def test_insertion_order_is_preserved() -> None:
    errors = ErrorCollector()
    for name in ("c", "a", "b"):
        errors.add(name, "blank")

    assert [e.attribute for e in errors] == ["c", "a", "b"]


def test_empty_and_any() -> None:
    errors = ErrorCollector()
    assert errors.empty
    assert not errors.any
    assert len(errors) == 0

    errors.add("x")

    assert not errors.empty
    assert errors.any
    assert len(errors) == 1


def test_to_list_is_a_copy() -> None:
    errors = ErrorCollector()
    errors.add("x")

    snapshot = errors.to_list()
    snapshot.clear()

    assert len(errors) == 1


def test_halt_sets_flag_without_raising() -> None:
    errors = ErrorCollector()

    errors.add("username", "is required", halt=True)

    assert errors.halted
    assert len(errors) == 1


def test_adds_after_halt_are_dropped() -> None:
    errors = ErrorCollector()
    errors.add("username", "is required", halt=True)

    errors.add("email", "is required")

    assert [e.attribute for e in errors] == ["username"]


def test_clear_resets_errors_and_halt() -> None:
    errors = ErrorCollector()
    errors.add("a", halt=True)

    errors.clear()

    assert errors.empty
    assert not errors.halted
    errors.add("b")
    assert len(errors) == 1


def test_for_attribute() -> None:
    errors = ErrorCollector()
    errors.add("a", "blank")
    errors.add("b", "blank")
    errors.add("a", "invalid")

    assert [e.type for e in errors.for_attribute("a")] == ["blank", "invalid"]
