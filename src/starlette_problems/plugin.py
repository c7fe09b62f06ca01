"""Configuration surface and installation of the problem details extension."""

from __future__ import annotations

from typing import Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .converters import ProblemConverter, UnconfiguredProblemConverter
from .core.errors import ProblemsConfigurationError
from .core.logging import get_logger
from .core.request_context import ProblemExchange, RenderSource, get_exchange
from .core.settings import ExceptionLogLevel, ProblemSettings, get_settings
from .dispatcher import ProblemDispatcher
from .middleware import ProblemMiddleware
from .problem import PROBLEM_CONTENT_TYPE, ProblemLike
from .registry import HandlerRegistry, ProblemHandler


class Problems:
    """Map exceptions and error responses of a Starlette app to RFC 7807 problems.

    Configure handlers and the converter, then call :meth:`install` once
    before the application starts serving::

        problems = Problems(converter=PydanticProblemConverter())

        @problems.exception(PermissionError)
        def forbidden(problem, request, exc):
            problem.status_code = 403
            problem.detail = str(exc)

        problems.install(app)
    """

    def __init__(
        self,
        settings: ProblemSettings | None = None,
        *,
        converter: ProblemConverter | None = None,
        enable_automatic_response_conversion: bool | None = None,
        exception_logging: ExceptionLogLevel | str | None = None,
        logger_name: str | None = None,
    ) -> None:
        settings = settings or get_settings()

        self.registry = HandlerRegistry()
        self.dispatcher = ProblemDispatcher(self.registry)
        self.converter: ProblemConverter = converter or UnconfiguredProblemConverter()

        if enable_automatic_response_conversion is None:
            enable_automatic_response_conversion = settings.enable_automatic_response_conversion
        self.enable_automatic_response_conversion = enable_automatic_response_conversion

        if exception_logging is None:
            exception_logging = settings.exception_logging
        self.exception_logging = _coerce_log_level(exception_logging)

        self.logger_name = logger_name or settings.logger_name
        self._installed = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def register(self, exc_type: type[BaseException], handler: ProblemHandler) -> None:
        """Shape problems for exceptions of exactly ``exc_type`` with ``handler``."""

        self.registry.register(exc_type, handler)

    def exception(self, exc_type: type[BaseException]) -> Callable[[ProblemHandler], ProblemHandler]:
        """Decorator form of :meth:`register`."""

        def decorator(handler: ProblemHandler) -> ProblemHandler:
            self.register(exc_type, handler)
            return handler

        return decorator

    def set_default(self, handler: ProblemHandler) -> None:
        self.registry.set_default(handler)

    def default(self, handler: ProblemHandler) -> ProblemHandler:
        """Decorator form of :meth:`set_default`."""

        self.set_default(handler)
        return handler

    def set_not_found(self, handler: ProblemHandler) -> None:
        self.registry.set_not_found(handler)

    def not_found(self, handler: ProblemHandler) -> ProblemHandler:
        """Decorator form of :meth:`set_not_found`."""

        self.set_not_found(handler)
        return handler

    def set_converter(self, converter: ProblemConverter) -> None:
        if self._installed:
            raise ProblemsConfigurationError(
                "The problem converter cannot be changed after the extension is installed"
            )
        self.converter = converter

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------
    def install(self, app: Starlette) -> None:
        """Attach the three interception points to ``app`` and freeze the registry."""

        if self._installed:
            raise ProblemsConfigurationError("This Problems instance is already installed")
        if not isinstance(app, Starlette):
            raise ProblemsConfigurationError(
                f"Problems can only be installed on Starlette applications, got {type(app).__name__}",
                details={"app": repr(app)},
            )

        app.add_middleware(ProblemMiddleware, problems=self)
        app.router.default = UnmatchedRouteHook(self, fallback=app.router.default)

        self.registry.freeze()
        self._installed = True

    @property
    def installed(self) -> bool:
        return self._installed

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, problem: ProblemLike, exchange: ProblemExchange, source: RenderSource) -> Response:
        """Convert a finalized problem and record the rendering on the exchange."""

        body = self.converter.convert(problem)
        status_code = int(problem.status_code)
        exchange.mark_rendered(source, status_code)

        get_logger(self.logger_name).debug(
            "problem.rendered",
            status_code=status_code,
            source=source.value,
            instance=problem.instance,
        )
        return Response(content=body, status_code=status_code, media_type=PROBLEM_CONTENT_TYPE)


class UnmatchedRouteHook:
    """Router default that renders the not-found problem for unmatched requests."""

    def __init__(self, problems: Problems, fallback: ASGIApp) -> None:
        self._problems = problems
        self._fallback = fallback

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._fallback(scope, receive, send)
            return

        request = Request(scope, receive)
        exchange = get_exchange(request)
        if exchange.rendered or exchange.status_code is not None:
            get_logger(self._problems.logger_name).debug(
                "problem.not_found.skipped",
                method=request.method,
                path=request.url.path,
                status_code=exchange.status_code,
            )
            await self._fallback(scope, receive, send)
            return

        problem = self._problems.dispatcher.not_found(request)
        response = self._problems.render(problem, exchange, RenderSource.NOT_FOUND)
        await response(scope, receive, send)


def _coerce_log_level(value: ExceptionLogLevel | str) -> ExceptionLogLevel:
    if isinstance(value, ExceptionLogLevel):
        return value
    try:
        return ExceptionLogLevel(value.strip().lower())
    except ValueError as exc:
        raise ProblemsConfigurationError(
            f"Invalid exception logging level: {value!r}",
            details={"allowed": [level.value for level in ExceptionLogLevel]},
        ) from exc


__all__ = ["Problems", "UnmatchedRouteHook"]
