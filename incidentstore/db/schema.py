"""
incidentstore — Database Schema
Supports SQLite (dev/test) and server databases (MySQL / Postgres) via DATABASE_URL.
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Engine, Index, Integer, String, Text, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from ..config import Settings


def _utcnow() -> datetime:
    # Stored as naive UTC on every backend
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ── Engine factory ────────────────────────────────────────────────────────────

def make_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for ``settings.database_url``.
    Built once at startup and shared for the process lifetime.
    """
    db_url = settings.database_url

    if settings.is_sqlite_memory:
        # In-memory SQLite — StaticPool keeps the single connection (and its data) alive
        engine = create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif settings.is_sqlite:
        # SQLite file — NullPool avoids sharing connections across threads
        engine = create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
    else:
        # Server databases: QueuePool with health-check pre-ping
        return create_engine(
            db_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
        )

    event.listen(engine, "connect", _configure_sqlite_connection)
    return engine


def _configure_sqlite_connection(conn, _record):
    conn.execute("PRAGMA synchronous=NORMAL")


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


# ── ORM Models ────────────────────────────────────────────────────────────────

class Incident(Base):
    __tablename__ = "incidents"
    id          = Column(Integer, primary_key=True, autoincrement=True)
    created_at  = Column(DateTime, nullable=False, default=_utcnow)
    updated_at  = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
    name        = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    status      = Column(String(16), nullable=False)          # open|closed

    __table_args__ = (
        Index("ix_incidents_status", "status"),
    )


class Service(Base):
    __tablename__ = "services"
    id          = Column(Integer, primary_key=True, autoincrement=True)
    created_at  = Column(DateTime, nullable=False, default=_utcnow)
    updated_at  = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
    name        = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)


class Alert(Base):
    __tablename__ = "alerts"
    id          = Column(Integer, primary_key=True, autoincrement=True)
    created_at  = Column(DateTime, nullable=False, default=_utcnow)
    updated_at  = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
    name        = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    # Weak references: ids only, no FK constraint and no cascade
    incident_id = Column(Integer, nullable=True)
    service_id  = Column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_alerts_incident_id", "incident_id"),
        Index("ix_alerts_service_id", "service_id"),
    )


# ── DB lifecycle ──────────────────────────────────────────────────────────────

def init_db(engine: Engine) -> None:
    """Create all tables (idempotent — skips existing tables)."""
    Base.metadata.create_all(bind=engine)
