"""Serializers turning finalized problems into ``application/problem+json`` bodies."""

from __future__ import annotations

import json
from typing import Any, Callable, Protocol

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from .core.errors import NoConverterConfiguredError
from .problem import ProblemLike

CORE_MEMBERS: tuple[str, ...] = ("type", "title", "status", "detail", "instance")
_RESERVED_ATTRIBUTES = frozenset({*CORE_MEMBERS, "status_code", "additional_details"})

ExclusionStrategy = Callable[[str, Any], bool]
NamingStrategy = Callable[[str], str]


class ProblemConverter(Protocol):
    """Serializes a problem into the response body.

    Implementations are configured once and shared by concurrent requests.
    """

    def convert(self, problem: ProblemLike) -> str:
        ...


def problem_members(problem: ProblemLike, *, include_status_code: bool = False) -> dict[str, Any]:
    """Return the flat member mapping of ``problem``.

    Core members come first and win over extension members with the same
    name. Extensions are ``additional_details`` followed by public attributes
    declared on :class:`~starlette_problems.problem.ProblemError` subclasses.
    """

    members: dict[str, Any] = {name: getattr(problem, name, None) for name in CORE_MEMBERS}
    if include_status_code:
        members["status_code"] = problem.status_code

    extensions: dict[str, Any] = dict(problem.additional_details)
    for name, value in vars(problem).items():
        if name.startswith("_") or name in _RESERVED_ATTRIBUTES:
            continue
        extensions[name] = value

    excluded = getattr(type(problem), "excluded_fields", frozenset())
    for name, value in extensions.items():
        if name in excluded:
            continue
        members.setdefault(name, value)
    return members


class UnconfiguredProblemConverter:
    """Placeholder that fails loudly until a real converter is configured."""

    def convert(self, problem: ProblemLike) -> str:
        raise NoConverterConfiguredError()


# ----------------------------------------------------------------------
# pydantic
# ----------------------------------------------------------------------
class ProblemDocument(BaseModel):
    """Wire shape of a problem; extension members are kept as extra fields."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None

    @model_serializer(mode="wrap")
    def _apply_naming_strategy(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        naming = (info.context or {}).get("naming_strategy")
        if naming is None:
            return data
        return {naming(key): value for key, value in data.items()}


class PydanticProblemConverter:
    """Serialize problems through :class:`ProblemDocument`.

    ``alias_generator`` overrides the key naming, e.g.
    :func:`pydantic.alias_generators.to_pascal`.
    """

    def __init__(self, *, alias_generator: NamingStrategy | None = None, indent: int | None = None) -> None:
        self._alias_generator = alias_generator
        self._indent = indent

    def convert(self, problem: ProblemLike) -> str:
        members = {
            name: value
            for name, value in problem_members(problem).items()
            if value is not None
        }
        document = ProblemDocument.model_validate(members)
        return document.model_dump_json(
            exclude_none=True,
            indent=self._indent,
            context={"naming_strategy": self._alias_generator},
        )


# ----------------------------------------------------------------------
# json
# ----------------------------------------------------------------------
def exclude_fields(*names: str) -> ExclusionStrategy:
    """Build an exclusion strategy skipping the given member names."""

    excluded = frozenset(names)

    def should_skip(name: str, value: Any) -> bool:
        return name in excluded

    return should_skip


class JsonProblemConverter:
    """Serialize the problem's object graph with :mod:`json`.

    The default exclusion strategy drops ``status_code`` and keeps the numeric
    ``status`` mirror.
    """

    def __init__(
        self,
        *,
        exclusion_strategy: ExclusionStrategy | None = None,
        serialize_nulls: bool = False,
        indent: int | None = None,
        sort_keys: bool = False,
        default: Callable[[Any], Any] | None = str,
    ) -> None:
        self._should_skip = exclusion_strategy or exclude_fields("status_code")
        self._serialize_nulls = serialize_nulls
        self._indent = indent
        self._sort_keys = sort_keys
        self._default = default

    def convert(self, problem: ProblemLike) -> str:
        payload: dict[str, Any] = {}
        for name, value in problem_members(problem, include_status_code=True).items():
            if self._should_skip(name, value):
                continue
            if value is None and not self._serialize_nulls:
                continue
            payload[name] = value
        return json.dumps(
            payload,
            indent=self._indent,
            sort_keys=self._sort_keys,
            default=self._default,
        )


__all__ = [
    "CORE_MEMBERS",
    "ExclusionStrategy",
    "JsonProblemConverter",
    "NamingStrategy",
    "ProblemConverter",
    "ProblemDocument",
    "PydanticProblemConverter",
    "UnconfiguredProblemConverter",
    "exclude_fields",
    "problem_members",
]
