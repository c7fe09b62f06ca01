"""Core utilities shared by the problem details extension."""

from .errors import NoConverterConfiguredError, ProblemsConfigurationError, ProblemsError
from .logging import configure_logging, get_logger
from .request_context import (
    ExchangePhase,
    ProblemExchange,
    RenderSource,
    bind_exchange,
    get_exchange,
)
from .settings import ExceptionLogLevel, ProblemSettings, get_settings

__all__ = [
    "NoConverterConfiguredError",
    "ProblemsConfigurationError",
    "ProblemsError",
    "configure_logging",
    "get_logger",
    "ExchangePhase",
    "ProblemExchange",
    "RenderSource",
    "bind_exchange",
    "get_exchange",
    "ExceptionLogLevel",
    "ProblemSettings",
    "get_settings",
]
