import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.calendar_export.router import router as calendar_router
from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.features.lookup_guest.router import MISSING_NAMES_ERROR
from src.guests.routers import router as guests_router
from src.guests.urls import LOOKUP_GUEST_URL
from src.routers import healthz

logger = logging.getLogger(__name__)

INVALID_REQUEST_ERROR = "Invalid request"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding RSVP API",
    description="Guest lookup and party RSVPs backed by Airtable",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(healthz, prefix="/healthz", tags=["Healthz"])
app.include_router(guests_router, tags=["RSVP"])
app.include_router(calendar_router, tags=["Calendar"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the {error} envelope; pydantic's details stay in the log."""
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    if request.url.path == LOOKUP_GUEST_URL:
        return JSONResponse(status_code=400, content={"error": MISSING_NAMES_ERROR})
    return JSONResponse(status_code=400, content={"error": INVALID_REQUEST_ERROR})


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding RSVP API"}
