"""Turn collected ValidationErrors into the reported error dicts.

Two shapes, selected by :class:`~.configuration.ErrorMode`:

- ``default``: ``{"attribute": "email", "type": "blank",
  "message": "Email can't be blank"}``
- ``code``: ``{"code": "EMAIL_IS_REQUIRED"}``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .configuration import ErrorMode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .errors import ValidationError

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES: dict[str, str] = {
    "blank": "can't be blank",
    "invalid": "is invalid",
    "not_boolean": "must be a boolean value",
    "too_long": "is too long (maximum is {count} {unit})",
    "too_short": "is too short (minimum is {count} {unit})",
    "wrong_length": "is the wrong length (should be {count} {unit})",
    "inclusion": "is not included in the list",
    "not_a_number": "is not a number",
    "greater_than": "must be greater than {count}",
    "greater_than_or_equal_to": "must be greater than or equal to {count}",
    "less_than": "must be less than {count}",
    "less_than_or_equal_to": "must be less than or equal to {count}",
    "equal_to": "must be equal to {count}",
    "invalid_type": "must be a Hash or Array",
    "too_large": "is too large (maximum is {count} items)",
}

CODE_SUFFIXES: dict[str, str] = {
    "blank": "IS_REQUIRED",
    "not_boolean": "MUST_BE_BOOLEAN",
    "invalid": "INVALID_FORMAT",
    "too_long": "EXCEEDS_MAX_LENGTH_{count}",
    "too_short": "BELOW_MIN_LENGTH_{count}",
    "wrong_length": "MUST_BE_LENGTH_{count}",
    "inclusion": "NOT_IN_ALLOWED_VALUES",
    "not_a_number": "MUST_BE_A_NUMBER",
    "greater_than": "MUST_BE_GREATER_THAN_{count}",
    "greater_than_or_equal_to": "MUST_BE_AT_LEAST_{count}",
    "less_than": "MUST_BE_LESS_THAN_{count}",
    "less_than_or_equal_to": "MUST_BE_AT_MOST_{count}",
    "equal_to": "MUST_BE_EQUAL_TO_{count}",
    "invalid_type": "INVALID_TYPE",
    "too_large": "ARRAY_TOO_LARGE",
}

_DEFAULT_UNIT = "characters"


def humanize(attribute: str) -> str:
    """``"user.first_name"`` -> ``"User first name"``; brackets are kept."""
    text = attribute.replace("_", " ").replace(".", " ")
    return text[:1].upper() + text[1:]


def code_prefix(attribute: str) -> str:
    """``"items[0].name"`` -> ``"ITEMS[0]_NAME"``."""
    return attribute.replace(".", "_").upper()


def default_phrase(error: ValidationError) -> str:
    """The built-in phrase for *error*'s type, without the attribute label."""
    template = MESSAGE_TEMPLATES.get(error.type)
    if template is None:
        return error.type
    interpolation = {"unit": _DEFAULT_UNIT, **error.options}
    return template.format(**interpolation)


def _fallback_phrase(error: ValidationError) -> str:
    template = MESSAGE_TEMPLATES.get(error.type, error.type)
    return template.split(" (", 1)[0].replace("{count}", "").strip()


def full_message(error: ValidationError) -> str:
    """Humanized attribute label followed by the custom or default phrase."""
    label = humanize(error.attribute)
    try:
        phrase = error.message if error.has_custom_message else default_phrase(error)
    except (KeyError, IndexError, ValueError):
        logger.warning(
            "Could not build message for %s (%s); using fallback",
            error.attribute,
            error.type,
            exc_info=True,
        )
        phrase = _fallback_phrase(error)
    return f"{label} {phrase}"


def error_code(error: ValidationError) -> str:
    if error.has_custom_message:
        suffix = error.message
    else:
        template = CODE_SUFFIXES.get(error.type)
        if template is None:
            suffix = error.type.upper()
        else:
            suffix = template.format(count=error.options.get("count", ""))
    return f"{code_prefix(error.attribute)}_{suffix}"


def format_error(error: ValidationError, mode: ErrorMode) -> dict[str, Any]:
    if mode is ErrorMode.CODE:
        return {"code": error_code(error)}
    return {
        "attribute": error.attribute,
        "type": error.type,
        "message": full_message(error),
    }


def format_errors(
    errors: Iterable[ValidationError], mode: ErrorMode
) -> list[dict[str, Any]]:
    return [format_error(error, mode) for error in errors]
