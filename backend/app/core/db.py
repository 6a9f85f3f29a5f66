from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings


def _engine_kwargs() -> dict:
    if not settings.is_sqlite:
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite: every session must share the one connection
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs())


def init_db(session: Session) -> None:
    # Tables should be created with Alembic migrations outside local dev.
    # Models are imported so their tables are registered on the metadata.
    from app import models  # noqa: F401

    if settings.ENVIRONMENT == "local":
        SQLModel.metadata.create_all(session.get_bind())
