"""RFC 7807 problem details for Starlette and FastAPI applications."""

from .converters import (
    JsonProblemConverter,
    ProblemConverter,
    PydanticProblemConverter,
    UnconfiguredProblemConverter,
    exclude_fields,
    problem_members,
)
from .core.errors import NoConverterConfiguredError, ProblemsConfigurationError, ProblemsError
from .core.logging import configure_logging
from .core.request_context import ProblemExchange, get_exchange
from .core.settings import ExceptionLogLevel, ProblemSettings, get_settings
from .dispatcher import ProblemDispatcher, finalize_problem
from .middleware import ProblemMiddleware
from .plugin import Problems
from .problem import (
    PROBLEM_CONTENT_TYPE,
    Problem,
    ProblemError,
    describe_status,
    is_error_status,
)
from .registry import HandlerRegistry, ProblemHandler

__all__ = [
    "JsonProblemConverter",
    "ProblemConverter",
    "PydanticProblemConverter",
    "UnconfiguredProblemConverter",
    "exclude_fields",
    "problem_members",
    "NoConverterConfiguredError",
    "ProblemsConfigurationError",
    "ProblemsError",
    "configure_logging",
    "ProblemExchange",
    "get_exchange",
    "ExceptionLogLevel",
    "ProblemSettings",
    "get_settings",
    "ProblemDispatcher",
    "finalize_problem",
    "ProblemMiddleware",
    "Problems",
    "PROBLEM_CONTENT_TYPE",
    "Problem",
    "ProblemError",
    "describe_status",
    "is_error_status",
    "HandlerRegistry",
    "ProblemHandler",
]
