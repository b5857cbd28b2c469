"""Tests for the session context and the in-process session store."""

from dataclasses import FrozenInstanceError

import pytest

from simulator import session as session_store
from simulator.schemas import Analysis, StudentResponse
from simulator.session import SessionContext


def _responses(n=2):
	return [StudentResponse(id=i, content=f"answer {i}") for i in range(1, n + 1)]


class TestSessionContext:
	"""Transitions on SessionContext."""

	def test_new_batch_clears_analysis(self):
		ctx = SessionContext().with_responses("q1", _responses(), mode="mock")
		ctx = ctx.with_analysis(Analysis(question="why?", response="because"))
		assert ctx.analysis is not None
		replaced = ctx.with_responses("q2", _responses(3), mode="mock")
		assert replaced.analysis is None
		assert replaced.question == "q2"
		assert len(replaced.responses) == 3
		assert replaced.session_id == ctx.session_id

	def test_context_is_immutable(self):
		ctx = SessionContext()
		with pytest.raises(FrozenInstanceError):
			ctx.question = "changed"

	def test_remixed_keeps_record_analysis(self):
		analysis = Analysis(question="why?", response="because")
		ctx = SessionContext().remixed("abc123", "q", _responses(), analysis)
		assert ctx.remixed_from == "abc123"
		assert ctx.mode == "remix"
		assert ctx.analysis == analysis

	def test_new_batch_after_remix_drops_origin(self):
		ctx = SessionContext().remixed("abc123", "q", _responses(), None)
		assert ctx.with_responses("q", _responses(), mode="mock").remixed_from is None


class TestSessionStore:
	"""get/save round trips through the module-level store."""

	def test_get_or_create_keeps_requested_id(self):
		ctx = session_store.get_or_create_session("fixed-id")
		assert ctx.session_id == "fixed-id"
		assert session_store.get_session("fixed-id") is None

	def test_save_then_get(self):
		ctx = session_store.save_session(SessionContext().with_responses("q", _responses()))
		assert session_store.get_session(ctx.session_id) == ctx
		assert session_store.get_or_create_session(ctx.session_id) == ctx

	def test_missing_id(self):
		assert session_store.get_session(None) is None
		assert session_store.get_session("nope") is None

	def test_last_write_wins(self):
		ctx = session_store.save_session(SessionContext().with_responses("q", _responses()))
		session_store.save_session(ctx.with_responses("q2", _responses(1)))
		assert session_store.get_session(ctx.session_id).question == "q2"
