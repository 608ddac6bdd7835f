"""Context — the mutable carrier of an interactor's inputs and outcome."""

from __future__ import annotations

from typing import Any

from ..primitives.exceptions import ContextFailure


class Context:
    """Key/value store with success/failure state.

    Unknown names read as ``None`` (both via :meth:`get` and attribute
    access), so interactors can probe optional inputs freely.

    Usage::

        context = Context(email="a@b.c")
        context.email          # "a@b.c"
        context.missing        # None
        context.fail(errors=[{"code": "EMAIL_IS_REQUIRED"}])  # raises ContextFailure
    """

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_values", dict(values))
        object.__setattr__(self, "_failed", False)
        object.__setattr__(self, "errors", [])

    # ── Access ───────────────────────────────────────────────────

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._values.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "errors":
            object.__setattr__(self, name, value)
            return
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    # ── Outcome ──────────────────────────────────────────────────

    @property
    def success(self) -> bool:
        return not self._failed

    @property
    def failure(self) -> bool:
        return self._failed

    def fail(
        self, errors: list[dict[str, Any]] | None = None, **values: Any
    ) -> None:
        """Mark the run as failed and unwind it via :class:`ContextFailure`."""
        object.__setattr__(self, "_failed", True)
        if errors is not None:
            object.__setattr__(self, "errors", list(errors))
        self._values.update(values)
        raise ContextFailure(self)

    def __repr__(self) -> str:
        state = "failure" if self._failed else "success"
        return f"Context({self._values!r}, {state})"
