from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from booking_api.core.config import Settings, get_settings
from booking_api.core.database import build_engine, init_db
from booking_api.core.errors import register_exception_handlers
from booking_api.api import admin, bookings
from booking_api.core.logger import setup_logging, logger
from booking_api.services.booking_service import BookingService
from booking_api.services.notification_service import SmsNotifier
from booking_api.services.store import BookingStore
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional


def create_app(settings: Optional[Settings] = None, notifier: Optional[SmsNotifier] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"🚀 Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
        init_db(app.state.engine)
        yield
        # Shutdown
        app.state.engine.dispose()
        logger.info("🛑 Shutting down backend")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan
    )

    engine = build_engine(settings.DATABASE_URL)
    notifier = notifier or SmsNotifier(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.booking_service = BookingService(BookingStore(engine), notifier, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(admin.router, prefix=settings.API_PREFIX, tags=["Admin"])
    app.include_router(bookings.router, prefix=settings.API_PREFIX, tags=["Bookings"])

    @app.get("/")
    async def health_check():
        return {"ok": True, "service": "booking-api"}

    @app.get("/health")
    async def health_check_std():
        return {"ok": True, "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("booking_api.main:app", host=app.state.settings.HOST, port=app.state.settings.PORT, reload=True)
