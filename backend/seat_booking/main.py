"""
Seat Booking API - Main Application Entry Point

An interactive seat-reservation grid demonstrating:
- Tiered pricing derived from row position
- Selection guarded by a per-booking cap and a no-isolated-seat rule
- A two-step request/confirm booking workflow
- Booked seats persisted to Redis and restored on startup
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seat_booking.core.config import get_settings
from seat_booking.core.logging import setup_logging, get_logger
from seat_booking.core.metrics import metrics_endpoint
from seat_booking.api.errors import register_exception_handlers
from seat_booking.api.router import api_router
from seat_booking.api.middleware import RequestLoggingMiddleware
from seat_booking.services.booking_workflow import BookingWorkflow

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        store_backend=settings.STORE_BACKEND,
    )

    workflow = BookingWorkflow.from_settings(settings)
    if workflow.record_store.available:
        logger.info("booking_store_ready", key=settings.BOOKED_SEATS_KEY)
    else:
        logger.warning("booking_store_unavailable", message="Running without persistence")

    workflow.load_persisted()
    app.state.workflow = workflow

    yield

    if workflow.record_store.store is not None:
        workflow.record_store.store.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Seat map booking API with tiered pricing and no-isolated-seat selection",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    workflow = getattr(app.state, "workflow", None)
    store = workflow.record_store.store if workflow else None
    if store is None:
        store_status = "disabled"
    else:
        store_status = "connected" if store.ping() else "unreachable"

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "store": store_status,
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
