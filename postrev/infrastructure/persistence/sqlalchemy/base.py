# postrev/infrastructure/persistence/sqlalchemy/base.py
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(url: str) -> Engine:
    is_in_memory = "mode=memory" in url or ":memory:" in url
    pool_kwargs = {"poolclass": StaticPool} if is_in_memory else {}
    if url.startswith("sqlite:///") and not is_in_memory:
        Path(url[len("sqlite:///") :]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False}, **pool_kwargs)


def make_session_factory(url: str) -> sessionmaker:
    """Engine + sessionmaker for `url`, with the schema created."""
    engine = make_engine(url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)
