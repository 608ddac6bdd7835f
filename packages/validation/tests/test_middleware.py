from typing import Any

import pytest
from pydantic import BaseModel

from cqrs_ddd_validation import (
    ErrorCollector,
    IMiddleware,
    IValidationContext,
    MessageContext,
    ParamValidationMixin,
    ValidationFailedError,
    ValidatorMiddleware,
)


class RegisterUser(ParamValidationMixin, BaseModel):
    email: str | None = None
    password: str | None = None
    confirmation: str | None = None

    def custom_validate(self, errors: ErrorCollector) -> None:
        if self.password != self.confirmation:
            errors.add("confirmation", "mismatch", message="does not match")


RegisterUser.validates("email", presence=True, format=r"@")
RegisterUser.validates("password", presence=True, length={"minimum": 8})


class Ping(BaseModel):
    pass


async def handler(message: Any) -> str:
    return f"handled {type(message).__name__}"


def test_middleware_satisfies_protocol() -> None:
    assert isinstance(ValidatorMiddleware(), IMiddleware)
    assert isinstance(MessageContext(Ping()), IValidationContext)


@pytest.mark.asyncio()
async def test_valid_message_reaches_handler() -> None:
    middleware = ValidatorMiddleware()
    message = RegisterUser(
        email="a@b.c", password="long-enough", confirmation="long-enough"
    )

    assert await middleware(message, handler) == "handled RegisterUser"


@pytest.mark.asyncio()
async def test_invalid_message_raises_with_formatted_errors() -> None:
    middleware = ValidatorMiddleware()
    reached: list[Any] = []

    async def next_handler(message: Any) -> None:
        reached.append(message)

    with pytest.raises(ValidationFailedError) as exc_info:
        await middleware(RegisterUser(email="nope", password="short"), next_handler)

    assert reached == []
    assert exc_info.value.errors == [
        {"attribute": "email", "type": "invalid", "message": "Email is invalid"},
        {
            "attribute": "password",
            "type": "too_short",
            "message": "Password is too short (minimum is 8 characters)",
        },
    ]


@pytest.mark.asyncio()
async def test_custom_validate_on_message_is_used() -> None:
    middleware = ValidatorMiddleware()
    message = RegisterUser(email="a@b.c", password="long-enough", confirmation="x")

    with pytest.raises(ValidationFailedError) as exc_info:
        await middleware(message, handler)

    assert exc_info.value.errors[0]["message"] == "Confirmation does not match"


@pytest.mark.asyncio()
async def test_message_without_rules_passes_through() -> None:
    assert await ValidatorMiddleware()(Ping(), handler) == "handled Ping"


@pytest.mark.asyncio()
async def test_code_mode_on_message_class() -> None:
    class Rename(ParamValidationMixin, BaseModel):
        name: str = ""

    Rename.validates("name", presence=True)
    Rename.configure_validation(error_mode="code")

    with pytest.raises(ValidationFailedError) as exc_info:
        await ValidatorMiddleware()(Rename(), handler)

    assert exc_info.value.errors == [{"code": "NAME_IS_REQUIRED"}]


def test_message_context_reads_mappings_and_attributes() -> None:
    assert MessageContext({"a": 1}).get("a") == 1
    assert MessageContext({"a": 1}).get("b") is None
    assert MessageContext(RegisterUser(email="x")).get("email") == "x"
    assert MessageContext(RegisterUser()).get("unknown") is None


def test_message_context_fail_raises() -> None:
    with pytest.raises(ValidationFailedError) as exc_info:
        MessageContext({}).fail([{"code": "X"}])

    assert exc_info.value.errors == [{"code": "X"}]
