"""
Shared fixtures. Zero network calls: the generation service is replaced by
an ``httpx.MockTransport`` or by patching, and the gallery uses an in-memory
SQLite database.
"""
import random

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from simulator import session as session_store
from simulator.db import get_db, init_db, make_engine
from simulator.main import app
from simulator.settings import settings

VALID_KEY = "sk-test_abcdefghijklmnopqrstuvwxyz0123"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
	"""No server key, no artificial delay, fresh session store."""
	monkeypatch.setattr(settings, "openai_api_key", None)
	monkeypatch.setattr(settings, "mock_delay_seconds", 0)
	session_store.clear_sessions()
	yield
	session_store.clear_sessions()


@pytest.fixture
def db_session():
	engine = make_engine("sqlite://")
	init_db(engine)
	TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
	db = TestingSession()
	try:
		yield db
	finally:
		db.close()
		engine.dispose()


@pytest.fixture
def client(db_session):
	app.dependency_overrides[get_db] = lambda: db_session
	yield TestClient(app)
	app.dependency_overrides.clear()


def _chat_transport(content=None, *, status_code=200, json_body=None, exc=None, calls=None):
	"""MockTransport answering every chat call with ``content``."""

	def handler(request: httpx.Request) -> httpx.Response:
		if calls is not None:
			calls.append(request)
		if exc is not None:
			raise exc
		if json_body is not None:
			return httpx.Response(status_code, json=json_body)
		return httpx.Response(status_code, json={"choices": [{"message": {"role": "assistant", "content": content}}]})

	return httpx.MockTransport(handler)


@pytest.fixture
def rng():
	return random.Random(1234)


@pytest.fixture
def api_key():
	return VALID_KEY


@pytest.fixture
def make_transport():
	return _chat_transport
