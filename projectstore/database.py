# python
"""Database engine and session utilities.

This module sets up the synchronous SQLAlchemy engine backing the durable
local storage. Local reads and writes are short and run inline.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projectstore.models import Base


def create_local_engine(url: str, echo: bool = False) -> Engine:
    """Create the engine for ``url`` and make sure the schema exists."""
    url = (url or "").strip()
    if not url:
        raise RuntimeError(
            "LOCAL_DATABASE_URL is not configured. Set it in the environment or .env file (e.g., LOCAL_DATABASE_URL=sqlite:///./projectstore.db)."
        )

    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases only live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, echo=echo, **kwargs)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)
