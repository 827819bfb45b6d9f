"""Exception handlers for the Quality API.

Protean's handlers cover validation (400, which includes guard violations)
and missing objects (404). A failing store is reported as 503.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from quality.errors import PersistenceError


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"error": {"store": [exc.message]}})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
