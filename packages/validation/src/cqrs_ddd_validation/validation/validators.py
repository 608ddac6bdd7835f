"""Per-rule validators.

Every validator has the shape ``validate_x(errors, attribute, value, rule)``
and reports failures into an :class:`~.errors.ErrorCollector`; none of them
raise for a value that fails its rule. ``rule`` is the normalised config
produced by :mod:`.rules` (``True`` or a mapping of options).
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping, Set
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from .errors import ErrorCollector

NUMERIC_STRING = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

NUMERIC_CONSTRAINTS: tuple[tuple[str, Callable[[Any, Any], bool]], ...] = (
    ("greater_than", lambda n, limit: n <= limit),
    ("greater_than_or_equal_to", lambda n, limit: n < limit),
    ("less_than", lambda n, limit: n >= limit),
    ("less_than_or_equal_to", lambda n, limit: n > limit),
    ("equal_to", lambda n, limit: n != limit),
)


# ── Value helpers ────────────────────────────────────────────────


def is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping, Set))


def is_blank(value: Any) -> bool:
    """``None``, ``""`` and empty collections are blank; ``False`` and ``0`` are not."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if is_collection(value):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, (bool, complex))


def _is_finite(value: Any) -> bool:
    if isinstance(value, numbers.Rational):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def is_numeric(value: Any) -> bool:
    """Finite numbers (not ``bool``) and strings like ``"-12"`` or ``"3.5"``."""
    if _is_number(value):
        return _is_finite(value)
    if isinstance(value, bool):
        return False
    return NUMERIC_STRING.fullmatch(str(value)) is not None


def coerce_numeric(value: Any) -> Any:
    """Keep numbers as they are; parse strings as int unless they contain a dot."""
    if _is_number(value):
        return value
    text = str(value)
    return float(text) if "." in text else int(text)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _as_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return compile_pattern(pattern)


def _custom_message(rule: Any) -> str | None:
    if isinstance(rule, Mapping):
        return rule.get("message")
    return None


# ── Validators ───────────────────────────────────────────────────


def validate_presence(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    if not is_blank(value):
        return
    errors.add(attribute, "blank", message=_custom_message(rule))


def validate_boolean(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    # Identity checks: 1, 0 and "true" must not pass.
    if value is True or value is False:
        return
    errors.add(attribute, "not_boolean", message=_custom_message(rule))


def validate_format(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    if is_blank(value):
        return
    pattern = _as_pattern(rule["with"])
    if pattern.search(str(value)) is not None:
        return
    errors.add(attribute, "invalid", message=_custom_message(rule))


def validate_length(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    """Check ``minimum``, ``maximum`` and ``is`` independently.

    Collections are measured in items, anything else by the length of its
    string form. Combining ``is`` with a bound can report two errors.
    """
    if is_blank(value):
        return
    if is_collection(value):
        length, unit = len(value), "items"
    else:
        length, unit = len(str(value)), "characters"
    message = _custom_message(rule)

    minimum = rule.get("minimum")
    if minimum is not None and length < minimum:
        errors.add(attribute, "too_short", message=message, count=minimum, unit=unit)

    maximum = rule.get("maximum")
    if maximum is not None and length > maximum:
        errors.add(attribute, "too_long", message=message, count=maximum, unit=unit)

    exact = rule.get("is")
    if exact is not None and length != exact:
        errors.add(
            attribute, "wrong_length", message=message, count=exact, unit=unit
        )


def validate_inclusion(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    if is_blank(value):
        return
    try:
        included = value in rule["in"]
    except TypeError:
        # Unhashable value tested against a set.
        included = False
    if included:
        return
    errors.add(attribute, "inclusion", message=_custom_message(rule))


def validate_numericality(
    errors: ErrorCollector, attribute: str, value: Any, rule: Any
) -> None:
    if is_blank(value):
        return
    message = _custom_message(rule)
    if not is_numeric(value):
        errors.add(attribute, "not_a_number", message=message)
        return

    number = coerce_numeric(value)
    options = rule if isinstance(rule, Mapping) else {}
    for constraint, violated in NUMERIC_CONSTRAINTS:
        limit = options.get(constraint)
        if limit is None:
            continue
        if violated(number, limit):
            errors.add(attribute, constraint, message=message, count=limit)


# Dispatch order matters: presence runs first, nested last.
VALIDATORS: dict[str, Callable[[ErrorCollector, str, Any, Any], None]] = {
    "presence": validate_presence,
    "boolean": validate_boolean,
    "format": validate_format,
    "length": validate_length,
    "inclusion": validate_inclusion,
    "numericality": validate_numericality,
}
