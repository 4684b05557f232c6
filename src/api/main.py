"""FastAPI application for triggering the status check by hand."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import trigger_router
from core.config import API_DEBUG, API_VERSION
from core.errors import WorkLocationError
from core.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    configure_logging()
    logger.info("Manual trigger available at / on loopback hosts only")
    yield


app = FastAPI(
    title="Work Location Status",
    description="Sets the Slack status from the Google Calendar working location",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing and guard errors as plain text."""
    text = "Not found" if exc.status_code == 404 else str(exc.detail)
    return PlainTextResponse(text, status_code=exc.status_code)


@app.exception_handler(WorkLocationError)
async def work_location_error_handler(request: Request, exc: WorkLocationError):
    """Configuration or upstream failures raised outside the route body."""
    logger.error("Status check error: %s", exc)
    return PlainTextResponse("Error occurred", status_code=500)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions, including missing configuration."""
    logger.error("Unhandled error: %s", exc)
    return PlainTextResponse("Error occurred", status_code=500)


app.include_router(trigger_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
