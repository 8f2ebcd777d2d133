"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cinebox.api.routes import admin, health
from cinebox.config import settings
from cinebox.exceptions import BookingError
from cinebox.tasks.scheduler import create_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: register and start the background jobs
    scheduler = create_scheduler()
    app.state.scheduler = scheduler
    if settings.scheduler_enabled:
        scheduler.start()
        logger.info(
            f"Scheduler started with {len(scheduler.get_jobs())} jobs "
            f"(timezone {settings.timezone})"
        )
    else:
        logger.info("Scheduler disabled by configuration, background jobs will not run")

    yield

    # Shutdown: stop the scheduler without waiting for running jobs
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Map booking domain errors to their HTTP status."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Create FastAPI app
app = FastAPI(
    title="CineBox API",
    description="Cinema ticketing backend: bookings, catalog and promotions",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(BookingError, booking_error_handler)

# Include routers
app.include_router(health.router)
app.include_router(admin.router, prefix="/api", tags=["admin"])
