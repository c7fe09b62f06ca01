"""Registry mapping exception types to problem-shaping handlers."""

from __future__ import annotations

from http import HTTPStatus
from typing import Callable

from starlette.requests import Request

from .core.errors import ProblemsConfigurationError
from .problem import Problem

ProblemHandler = Callable[[Problem, Request, BaseException | None], None]


def default_handler(problem: Problem, request: Request, exc: BaseException | None) -> None:
    """Built-in handler used when no exact exception type is registered."""

    problem.instance = request.url.path
    problem.status_code = HTTPStatus.INTERNAL_SERVER_ERROR


def not_found_handler(problem: Problem, request: Request, exc: BaseException | None) -> None:
    """Built-in handler for requests that matched no route."""

    problem.instance = request.url.path
    problem.status_code = HTTPStatus.NOT_FOUND


class HandlerRegistry:
    """Exact-type lookup table populated once before the app serves traffic.

    Lookups never walk the exception's MRO: a handler registered for
    ``LookupError`` is not used for ``KeyError``.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[BaseException], ProblemHandler] = {}
        self._default: ProblemHandler = default_handler
        self._not_found: ProblemHandler = not_found_handler
        self._frozen = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def register(self, exc_type: type[BaseException], handler: ProblemHandler) -> None:
        """Associate ``handler`` with ``exc_type``, replacing any previous one."""

        self._ensure_mutable()
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            raise ProblemsConfigurationError(
                f"Handlers can only be registered for exception types, got {exc_type!r}"
            )
        self._handlers[exc_type] = handler

    def set_default(self, handler: ProblemHandler) -> None:
        self._ensure_mutable()
        self._default = handler

    def set_not_found(self, handler: ProblemHandler) -> None:
        self._ensure_mutable()
        self._not_found = handler

    def freeze(self) -> None:
        """Reject further configuration; called when the extension is installed."""

        self._frozen = True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def default(self) -> ProblemHandler:
        return self._default

    @property
    def not_found(self) -> ProblemHandler:
        return self._not_found

    def lookup(self, exc_type: type[BaseException]) -> ProblemHandler:
        """Return the handler registered for exactly ``exc_type`` or the default."""

        return self._handlers.get(exc_type, self._default)

    def __contains__(self, exc_type: object) -> bool:
        return exc_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise ProblemsConfigurationError(
                "Problem handlers cannot be changed after the extension is installed"
            )


__all__ = ["HandlerRegistry", "ProblemHandler", "default_handler", "not_found_handler"]
