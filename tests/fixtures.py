"""Demo application and exception types shared by the HTTP tests."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from starlette_problems import ProblemError


class ProblemToBeThrown(ProblemError):
    def __init__(self) -> None:
        super().__init__(
            type="Any type",
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Problem to be thrown",
            title="Awesome title",
        )


class OutOfCreditError(ProblemError):
    def __init__(self, balance: int, *, account: str) -> None:
        super().__init__(
            type="https://example.com/probs/out-of-credit",
            status_code=HTTPStatus.FORBIDDEN,
            title="You do not have enough credit.",
            detail=f"Your current balance is {balance}, but that costs 50.",
            additional_details={"balance": balance},
        )
        self.account = account


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/ok")
    async def ok() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/error")
    async def error() -> None:
        raise ValueError("boom")

    @app.get("/defined-error")
    async def defined_error() -> None:
        raise PermissionError("not allowed")

    @app.get("/key-error")
    async def key_error() -> None:
        raise KeyError("missing")

    @app.get("/customized-error")
    async def customized_error() -> None:
        raise RuntimeError("customized")

    @app.get("/problem")
    async def problem() -> None:
        raise ProblemToBeThrown()

    @app.get("/out-of-credit")
    async def out_of_credit() -> None:
        raise OutOfCreditError(30, account="acc-1")

    @app.get("/status")
    async def status() -> PlainTextResponse:
        return PlainTextResponse("nope", status_code=405)

    @app.get("/unauthorized")
    async def unauthorized() -> PlainTextResponse:
        return PlainTextResponse(
            "login first",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer", "Retry-After": "30"},
        )

    @app.get("/http-exception")
    async def http_exception() -> None:
        raise HTTPException(status_code=403, detail="Forbidden zone")

    @app.get("/redirect")
    async def redirect() -> PlainTextResponse:
        return PlainTextResponse("Hello world", status_code=308)

    @app.get("/items/{item_id}")
    async def item(item_id: int) -> dict[str, int]:
        return {"item_id": item_id}

    @app.get("/sync-error")
    def sync_error() -> None:
        raise ValueError("sync boom")

    return app


__all__ = ["OutOfCreditError", "ProblemToBeThrown", "build_app"]
