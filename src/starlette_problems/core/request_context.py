"""Request scoped state shared by the three interception points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from starlette.requests import Request

_STATE_ATTRIBUTE = "problem_exchange"


class ExchangePhase(str, Enum):
    """Lifecycle of a single request as seen by the extension."""

    IDLE = "idle"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    RESPONDING = "responding"
    DONE = "done"


class RenderSource(str, Enum):
    """Interception point that rendered the problem for a request."""

    EXCEPTION = "exception"
    STATUS = "status"
    NOT_FOUND = "not_found"


@dataclass
class ProblemExchange:
    """Per-request marker recording whether a problem was already rendered."""

    rendered: bool = False
    source: RenderSource | None = None
    status_code: int | None = None
    phase: ExchangePhase = ExchangePhase.IDLE

    def mark_rendered(self, source: RenderSource, status_code: int) -> None:
        self.rendered = True
        self.source = source
        self.status_code = status_code
        self.phase = ExchangePhase.RESPONDING


def bind_exchange(request: Request) -> ProblemExchange:
    """Attach a fresh exchange to ``request.state`` and return it."""

    exchange = ProblemExchange()
    setattr(request.state, _STATE_ATTRIBUTE, exchange)
    return exchange


def get_exchange(request: Request) -> ProblemExchange:
    """Return the exchange bound to the request, binding one if missing."""

    exchange = getattr(request.state, _STATE_ATTRIBUTE, None)
    if exchange is None:
        exchange = bind_exchange(request)
    return exchange


__all__ = [
    "ExchangePhase",
    "ProblemExchange",
    "RenderSource",
    "bind_exchange",
    "get_exchange",
]
