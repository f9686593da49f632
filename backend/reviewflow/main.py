"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reviewflow.api.v1 import payments, uploads
from reviewflow.core.config import settings
from reviewflow.core.logging import get_logger, setup_logging
from reviewflow.factory import build_payment_engine, build_upload_pipeline
from reviewflow.workflow.errors import BusyError, InvalidTransitionError, ValidationError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.log_level)
    logger = get_logger("startup")

    http = httpx.AsyncClient()
    app.state.payment_engine = build_payment_engine(http, settings)
    app.state.upload_pipeline = build_upload_pipeline(http, settings)
    logger.info("Application starting", env=settings.APP_ENV)
    yield
    app.state.upload_pipeline.close()
    app.state.payment_engine.close()
    await http.aclose()
    logger.info("Application shutting down")


app = FastAPI(
    title="Resume Review API",
    description="Resume upload, AI review and card payment workflows",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/v1"
app.include_router(payments.router, prefix=API_PREFIX)
app.include_router(uploads.router, prefix=API_PREFIX)


@app.exception_handler(BusyError)
async def busy_handler(request: Request, exc: BusyError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
