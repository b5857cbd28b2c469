from __future__ import annotations
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .settings import settings


DATABASE_URL = settings.database_url or "sqlite:///./simulator.db"


def make_engine(url: str) -> Engine:
	if not url.startswith("sqlite"):
		return create_engine(url, future=True)
	kwargs = {"connect_args": {"check_same_thread": False}}
	# In-memory SQLite lives per connection; share one so the gallery survives between requests
	if url in ("sqlite://", "sqlite:///:memory:"):
		kwargs["poolclass"] = StaticPool
	return create_engine(url, future=True, **kwargs)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def init_db(bind: Optional[Engine] = None) -> None:
	"""Create the gallery tables if they are missing."""
	from . import models  # noqa: F401  (registers tables on Base.metadata)

	Base.metadata.create_all(bind=bind or engine)


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
