"""Interactor — single-purpose command object with before hooks."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..primitives.exceptions import ContextFailure
from .context import Context

logger = logging.getLogger("cqrs_ddd.interactor")


class Interactor(ABC):
    """Base class for interactors.

    ``call(**inputs)`` builds a :class:`Context`, runs the registered before
    hooks (ancestors' first, in registration order), then :meth:`execute`.
    A hook or ``execute`` that calls ``context.fail(...)`` ends the run; the
    failed context is returned, not raised.

    Usage::

        class SendInvite(Interactor):
            def execute(self) -> None:
                self.context.invite_id = invites.send(self.context.email)

        result = SendInvite.call(email="a@b.c")
        if result.failure:
            ...
    """

    _before_hooks: ClassVar[tuple[str, ...]] = ()

    def __init__(self, context: Context | None = None, **inputs: Any) -> None:
        self.context = context if context is not None else Context(**inputs)

    @classmethod
    def before_run(cls, hook_name: str) -> None:
        """Register an instance method to run before :meth:`execute`.

        Registered on a base class, the hook also runs for every subclass.
        Registering the same name twice is a no-op.
        """
        if hook_name in cls._before_hooks:
            return
        cls._before_hooks = (*cls._before_hooks, hook_name)
        logger.debug("Registered before hook %s on %s", hook_name, cls.__qualname__)

    @classmethod
    def call(cls, **inputs: Any) -> Context:
        """Run the interactor and return its context, failed or not."""
        instance = cls(**inputs)
        try:
            instance.run()
        except ContextFailure as exc:
            logger.debug("%s failed: %s", cls.__name__, exc.context.errors)
        return instance.context

    @classmethod
    def call_or_raise(cls, **inputs: Any) -> Context:
        """Like :meth:`call` but lets :class:`ContextFailure` propagate."""
        instance = cls(**inputs)
        instance.run()
        return instance.context

    def run(self) -> None:
        for hook_name in self._before_hooks:
            getattr(self, hook_name)()
        self.execute()

    @abstractmethod
    def execute(self) -> None:
        """The interactor's main action."""
        ...
