from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from booking_api.core.logger import logger


def build_engine(database_url: str):
    """
    Create the SQLAlchemy engine for the booking store.
    SQLite connections are shared across the request threads FastAPI uses,
    and an in-memory URL keeps a single connection so every session sees
    the same database.
    """
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, echo=False, **kwargs)
    logger.info(f"✅ Database engine created ({engine.url.get_backend_name()})")
    return engine


def init_db(engine):
    # Import registers the table on SQLModel.metadata
    from booking_api.models.db_models import Booking  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("📦 Booking tables ready")
