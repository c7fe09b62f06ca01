"""RFC 7807 problem entities.

Two shapes carry the same members: :class:`Problem`, a plain record built by
the dispatcher, and :class:`ProblemError`, an exception that application code
raises when it already knows the complete problem it wants to report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, ClassVar, Mapping, Union

PROBLEM_CONTENT_TYPE = "application/problem+json"

_UNKNOWN_STATUS_PHRASE = "Unknown Status Code"


def describe_status(status_code: HTTPStatus | int) -> str:
    """Return the standard reason phrase for ``status_code``."""

    try:
        return HTTPStatus(int(status_code)).phrase
    except ValueError:
        return _UNKNOWN_STATUS_PHRASE


def is_error_status(status_code: HTTPStatus | int | None) -> bool:
    """Return ``True`` when a status code is present and at least 400."""

    return status_code is not None and int(status_code) >= 400


@dataclass
class Problem:
    """Mutable problem record filled in by registry handlers."""

    type: str | None = None
    status_code: HTTPStatus | int = HTTPStatus.INTERNAL_SERVER_ERROR
    detail: str | None = None
    instance: str | None = None
    additional_details: dict[str, Any] = field(default_factory=dict)
    status: int | None = None
    title: str | None = None


class ProblemError(Exception):
    """Exception that fully describes the problem it produces.

    Subclasses typically fix ``type``, ``status_code`` and ``title`` and accept
    their own extension members, either through ``additional_details`` or as
    ordinary public attributes. Attribute names listed in ``excluded_fields``
    are never serialized.
    """

    excluded_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(
        self,
        *,
        type: str | None = None,
        status_code: HTTPStatus | int = HTTPStatus.INTERNAL_SERVER_ERROR,
        detail: str | None = None,
        instance: str | None = None,
        additional_details: Mapping[str, Any] | None = None,
        title: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(detail or title or describe_status(status_code))
        self.type = type
        self.status_code = status_code
        self.detail = detail
        self.instance = instance
        self.additional_details = dict(additional_details or {})
        self.title = title
        self.status = status


ProblemLike = Union[Problem, ProblemError]


__all__ = [
    "PROBLEM_CONTENT_TYPE",
    "Problem",
    "ProblemError",
    "ProblemLike",
    "describe_status",
    "is_error_status",
]
