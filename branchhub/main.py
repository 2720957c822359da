"""FastAPI application entry point."""

from dotenv import load_dotenv

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load environment variables from .env file
load_dotenv()

from branchhub import models  # noqa: F401
from branchhub.api.routes import router
from branchhub.core.config import settings
from branchhub.core.exceptions import PersistenceError
from branchhub.core.logging import configure_logging
from branchhub.db.init_db import init_db

configure_logging()

app = FastAPI(title=settings.project_name)
app.include_router(router, prefix=settings.api_v1_prefix)


@app.on_event("startup")
def on_startup() -> None:
    """Initialize database artifacts."""
    init_db()


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Database write failed", "details": str(exc)})


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": f"{settings.project_name} is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Health check endpoint for Docker."""
    return {"status": "healthy"}
