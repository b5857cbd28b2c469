from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple

from .schemas import Analysis, StudentResponse


@dataclass(frozen=True)
class SessionContext:
	"""What one teacher is currently looking at.

	Transitions return a new context; a new batch always drops the analysis
	that was made for the previous one.
	"""
	session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
	question: Optional[str] = None
	responses: Tuple[StudentResponse, ...] = ()
	analysis: Optional[Analysis] = None
	mode: Optional[str] = None
	# Set when the batch was loaded from a gallery record
	remixed_from: Optional[str] = None

	def with_responses(
		self,
		question: str,
		responses: Iterable[StudentResponse],
		mode: Optional[str] = None,
	) -> "SessionContext":
		return replace(
			self,
			question=question,
			responses=tuple(responses),
			analysis=None,
			mode=mode,
			remixed_from=None,
		)

	def with_analysis(self, analysis: Optional[Analysis]) -> "SessionContext":
		return replace(self, analysis=analysis)

	def remixed(
		self,
		record_id: str,
		question: str,
		responses: Iterable[StudentResponse],
		analysis: Optional[Analysis],
	) -> "SessionContext":
		return replace(
			self.with_responses(question, responses, mode="remix"),
			analysis=analysis,
			remixed_from=record_id,
		)


# Process-local; the last write for a session id wins
_sessions: Dict[str, SessionContext] = {}


def get_session(session_id: Optional[str]) -> Optional[SessionContext]:
	if not session_id:
		return None
	return _sessions.get(session_id)


def get_or_create_session(session_id: Optional[str]) -> SessionContext:
	existing = get_session(session_id)
	if existing is not None:
		return existing
	return SessionContext(session_id=session_id) if session_id else SessionContext()


def save_session(context: SessionContext) -> SessionContext:
	_sessions[context.session_id] = context
	return context


def clear_sessions() -> None:
	_sessions.clear()
