"""Classification of failures into finalized problems."""

from __future__ import annotations

from http import HTTPStatus

from starlette.requests import Request

from .problem import Problem, ProblemError, ProblemLike, describe_status
from .registry import HandlerRegistry


def finalize_problem(problem: ProblemLike) -> ProblemLike:
    """Fill in ``status`` and ``title`` from ``status_code`` when left unset."""

    try:
        problem.status_code = HTTPStatus(int(problem.status_code))
    except ValueError:
        problem.status_code = int(problem.status_code)
    if problem.status is None:
        problem.status = int(problem.status_code)
    if not problem.title:
        problem.title = describe_status(problem.status_code)
    return problem


class ProblemDispatcher:
    """Select and apply the handler that shapes the problem for a request."""

    def __init__(self, registry: HandlerRegistry) -> None:
        self._registry = registry

    def classify(self, request: Request, failure: BaseException | None) -> ProblemLike:
        """Build the finalized problem describing ``failure``.

        A :class:`ProblemError` is used as is. Anything else gets a fresh
        :class:`Problem` shaped by the handler registered for its exact type.
        Errors raised by handlers propagate to the caller.
        """

        if isinstance(failure, ProblemError):
            return finalize_problem(failure)

        problem = Problem()
        if failure is None:
            handler = self._registry.default
        else:
            handler = self._registry.lookup(type(failure))
        handler(problem, request, failure)
        return finalize_problem(problem)

    def not_found(self, request: Request) -> ProblemLike:
        problem = Problem()
        self._registry.not_found(problem, request, None)
        return finalize_problem(problem)

    def from_status(self, request: Request, status_code: HTTPStatus | int) -> ProblemLike:
        """Describe a response that carried an error status without raising."""

        problem = Problem(status_code=status_code, instance=request.url.path)
        return finalize_problem(problem)


__all__ = ["ProblemDispatcher", "finalize_problem"]
