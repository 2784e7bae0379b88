"""FastAPI application setup and error mapping for Trailhead Insights."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api import router as api_router
from .errors import NotFoundError, ProviderFailure
from .resources import router as resources_router
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="trailhead/main")

app = FastAPI(title="Trailhead Insights")


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError):
    """Nothing matched the park code or location."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ProviderFailure)
def handle_provider_failure(request: Request, exc: ProviderFailure):
    """An upstream provider could not be read."""
    logger.warning("Provider failure", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(ValueError)
def handle_bad_request(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
app.include_router(resources_router, prefix="/v1")
