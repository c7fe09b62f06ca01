"""Tests for the problem serializers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from http import HTTPStatus

import pytest
from pydantic.alias_generators import to_camel, to_pascal

from starlette_problems import (
    JsonProblemConverter,
    NoConverterConfiguredError,
    Problem,
    ProblemError,
    PydanticProblemConverter,
    UnconfiguredProblemConverter,
    exclude_fields,
    finalize_problem,
    problem_members,
)


class RateLimited(ProblemError):
    excluded_fields = frozenset({"internal_ref"})

    def __init__(self, retry_after: int) -> None:
        super().__init__(
            type="https://example.com/probs/rate-limited",
            status_code=HTTPStatus.TOO_MANY_REQUESTS,
            additional_details={"limit": 100},
        )
        self.retry_after = retry_after
        self.internal_ref = "shard-7"
        self._cache_key = "ignored"


def _finalized(**kwargs) -> Problem:
    return finalize_problem(Problem(**kwargs))


def test_problem_members_flattens_extensions() -> None:
    problem = _finalized(
        status_code=400,
        instance="/orders",
        additional_details={"invalid_params": ["amount"], "status": 999},
    )

    members = problem_members(problem)

    assert list(members)[:5] == ["type", "title", "status", "detail", "instance"]
    assert members["status"] == 400
    assert members["invalid_params"] == ["amount"]
    assert "additional_details" not in members
    assert "status_code" not in members


def test_problem_members_reads_declared_attributes() -> None:
    members = problem_members(finalize_problem(RateLimited(retry_after=30)), include_status_code=True)

    assert members["retry_after"] == 30
    assert members["limit"] == 100
    assert members["status_code"] == HTTPStatus.TOO_MANY_REQUESTS
    assert "internal_ref" not in members
    assert "_cache_key" not in members


def test_unconfigured_converter_raises() -> None:
    with pytest.raises(NoConverterConfiguredError):
        UnconfiguredProblemConverter().convert(_finalized())


def test_pydantic_converter_omits_absent_members() -> None:
    body = json.loads(PydanticProblemConverter().convert(_finalized(instance="/orders")))

    assert body == {"title": "Internal Server Error", "status": 500, "instance": "/orders"}


def test_pydantic_converter_serializes_rich_extension_values() -> None:
    occurred = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    problem = _finalized(status_code=503, additional_details={"occurred_at": occurred, "retry": True})

    body = json.loads(PydanticProblemConverter().convert(problem))

    assert body["occurred_at"] == "2024-05-01T12:30:00Z"
    assert body["retry"] is True


@pytest.mark.parametrize(
    ("naming", "expected_key"),
    [(to_pascal, "RetryAfter"), (to_camel, "retryAfter")],
)
def test_pydantic_converter_applies_naming_strategy(naming, expected_key: str) -> None:
    converter = PydanticProblemConverter(alias_generator=naming)

    body = json.loads(converter.convert(finalize_problem(RateLimited(retry_after=30))))

    assert body[expected_key] == 30
    assert body[naming("status")] == 429


def test_json_converter_drops_status_code_only() -> None:
    body = json.loads(JsonProblemConverter().convert(finalize_problem(RateLimited(retry_after=5))))

    assert body == {
        "type": "https://example.com/probs/rate-limited",
        "title": "Too Many Requests",
        "status": 429,
        "limit": 100,
        "retry_after": 5,
    }


def test_json_converter_serializes_nulls_when_asked() -> None:
    body = json.loads(JsonProblemConverter(serialize_nulls=True).convert(_finalized()))

    assert body["type"] is None
    assert body["detail"] is None
    assert "status_code" not in body


def test_json_converter_custom_exclusion_strategy() -> None:
    converter = JsonProblemConverter(exclusion_strategy=exclude_fields("title"))

    body = json.loads(converter.convert(_finalized(status_code=404)))

    assert "title" not in body
    assert body["status_code"] == 404
    assert body["status"] == 404


def test_json_converter_falls_back_to_str_for_unknown_values() -> None:
    occurred = datetime(2024, 5, 1, tzinfo=timezone.utc)
    converter = JsonProblemConverter(indent=2, sort_keys=True)

    text = converter.convert(_finalized(additional_details={"occurred_at": occurred}))

    assert json.loads(text)["occurred_at"] == str(occurred)
    assert text.startswith("{\n  ")
