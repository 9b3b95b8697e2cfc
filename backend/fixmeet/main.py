import logging

from fastapi import FastAPI

from fixmeet.config import get_settings
from fixmeet.routes import availability, bookings, calendar, event_types, recommendations

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logger.info("Creating FastAPI application")
    app = FastAPI(
        title="FixMeet Availability API",
        version="0.1.0",
        description="Event types, bookings and bookable slot calculation.",
    )

    app.include_router(event_types.router, prefix="/api/event-types", tags=["event-types"])
    app.include_router(bookings.router, prefix="/api/bookings", tags=["bookings"])
    app.include_router(calendar.router, prefix="/api/calendars", tags=["calendars"])
    app.include_router(availability.router, prefix="/api/availability", tags=["availability"])
    app.include_router(
        recommendations.router,
        prefix="/api/recommendations",
        tags=["recommendations"],
    )

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    logger.info("Application ready with routers registered")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info("Starting uvicorn server on 0.0.0.0:8000")
    uvicorn.run(
        "fixmeet.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
