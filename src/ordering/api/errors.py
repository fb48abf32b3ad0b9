"""HTTP mapping for stale writes caught by aggregate versioning."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError


async def version_conflict_handler(request: Request, exc: ExpectedVersionError):
    """A concurrent write won the race; the client should reload and retry."""
    return JSONResponse(status_code=409, content={"error": str(exc)})


def register_conflict_handler(app: FastAPI) -> None:
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
