from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.routes import router as routes_router
from src.adapters.api.controllers.stations import router as stations_router
from src.adapters.settings import RouteFinderSettings
from src.domain.exceptions import DataSourceError, RoutingError

app = FastAPI(title="Transit Route Finder")
app.include_router(routes_router)
app.include_router(stations_router)


def _reveal_errors() -> bool:
    try:
        return RouteFinderSettings.from_env().reveal_errors
    except ValueError:
        # Invalid settings are reported by the request that loaded them.
        return False


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so clients can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if _reveal_errors() or isinstance(
        exc, (RoutingError, FileNotFoundError, RuntimeError, ValueError)
    ):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    status_code = 503 if isinstance(exc, DataSourceError) else 500
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
