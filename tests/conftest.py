"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from cinebox.api.routes import admin, health
from cinebox.exceptions import BookingError
from cinebox.main import booking_error_handler


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    app.add_exception_handler(BookingError, booking_error_handler)
    app.include_router(health.router)
    app.include_router(admin.router, prefix="/api")
    return app
