"""Validation errors raised by the engine and their HTTP mapping."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class InvalidInputError(ValueError):
    """
    Raised for inputs the engine cannot turn into a meaningful result.

    Ordinary degenerate business inputs (zero revenue, unprofitable setups)
    never raise; they resolve to sentinel values instead.
    """


def setup_error_handlers(app: FastAPI) -> None:
    """Map engine validation errors to HTTP 422 responses."""

    @app.exception_handler(InvalidInputError)
    async def handle_invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})
