"""ASGI middleware hosting the failure and outgoing-response hooks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .core.logging import get_logger
from .core.request_context import ExchangePhase, RenderSource, bind_exchange
from .core.settings import ExceptionLogLevel
from .problem import is_error_status

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .plugin import Problems

# Headers describing the replaced body; the problem response sets its own.
_BODY_HEADERS = frozenset({b"content-type", b"content-length"})


class ProblemMiddleware:
    """Render exceptions and error-status responses as problem documents.

    Every HTTP request gets a fresh :class:`ProblemExchange` on
    ``request.state`` before the downstream app runs. The unmatched-route hook
    installed on the router reads the same exchange.
    """

    def __init__(self, app: ASGIApp, problems: "Problems") -> None:
        self.app = app
        self._problems = problems

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        problems = self._problems
        request = Request(scope, receive)
        exchange = bind_exchange(request)
        exchange.phase = ExchangePhase.EXECUTING

        response_started = False
        replaced = False

        async def _send(message: Message) -> None:
            nonlocal response_started, replaced

            if replaced:
                # The original response was swapped for a problem; drop the rest of it.
                return

            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_started = True
                exchange.phase = ExchangePhase.SUCCEEDED
                if exchange.status_code is None:
                    exchange.status_code = status_code

                if (
                    not exchange.rendered
                    and problems.enable_automatic_response_conversion
                    and is_error_status(status_code)
                ):
                    problem = problems.dispatcher.from_status(request, status_code)
                    response = problems.render(problem, exchange, RenderSource.STATUS)
                    response.raw_headers.extend(
                        (key, value)
                        for key, value in message.get("headers", [])
                        if key.lower() not in _BODY_HEADERS
                    )
                    replaced = True
                    await response(scope, receive, send)
                    return

                exchange.phase = ExchangePhase.RESPONDING

            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception as exc:
            if response_started:
                raise
            exchange.phase = ExchangePhase.FAILED
            self._log_failure(request, exc)
            problem = problems.dispatcher.classify(request, exc)
            response = problems.render(problem, exchange, RenderSource.EXCEPTION)
            await response(scope, receive, send)

        exchange.phase = ExchangePhase.DONE

    def _log_failure(self, request: Request, exc: Exception) -> None:
        level = self._problems.exception_logging
        if level is ExceptionLogLevel.OFF:
            return

        logger = get_logger(self._problems.logger_name)
        if level is ExceptionLogLevel.FULL:
            logger.warning(
                "request.failed",
                method=request.method,
                path=request.url.path,
                error=str(exc),
                exc_info=exc,
            )
        else:
            logger.warning(
                "request.failed",
                method=request.method,
                path=request.url.path,
                error=str(exc),
            )


__all__ = ["ProblemMiddleware"]
