"""Shared gallery of saved sessions (question + responses + optional analysis)."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import PromptSessionRecord
from .schemas import Analysis, StudentResponse

logger = logging.getLogger(__name__)

_RESPONSES = TypeAdapter(List[StudentResponse])


class PromptSession(BaseModel):
	title: str = Field(min_length=1, max_length=256)
	question: str = Field(min_length=1)
	student_responses: List[StudentResponse] = Field(min_length=1)
	analysis_question: Optional[str] = None
	analysis_result: Optional[str] = None
	submitted_by: Optional[str] = Field(default=None, max_length=128)


class SubmittedPrompt(PromptSession):
	id: str
	submitted_at: datetime

	@property
	def analysis(self) -> Optional[Analysis]:
		if self.analysis_question and self.analysis_result is not None:
			return Analysis(question=self.analysis_question, response=self.analysis_result)
		return None


def dump_responses(responses: List[StudentResponse]) -> str:
	# Order is part of the record; quality is omitted when it was never assessed
	return json.dumps([r.model_dump(exclude_none=True) for r in responses])


def load_responses(raw: str) -> List[StudentResponse]:
	return _RESPONSES.validate_json(raw)


def _to_submitted(row: PromptSessionRecord) -> SubmittedPrompt:
	return SubmittedPrompt(
		id=row.id,
		title=row.title,
		question=row.question,
		student_responses=load_responses(row.student_responses),
		analysis_question=row.analysis_question,
		analysis_result=row.analysis_result,
		submitted_by=row.submitted_by,
		submitted_at=row.submitted_at,
	)


def submit_prompt_session(db: Session, session: PromptSession) -> Optional[SubmittedPrompt]:
	row = PromptSessionRecord(
		title=session.title.strip(),
		question=session.question,
		student_responses=dump_responses(session.student_responses),
		analysis_question=session.analysis_question or None,
		analysis_result=session.analysis_result or None,
		submitted_by=(session.submitted_by or "").strip() or "Anonymous",
		submitted_at=datetime.utcnow(),
	)
	try:
		db.add(row)
		db.commit()
		db.refresh(row)
	except SQLAlchemyError as err:
		db.rollback()
		logger.error("Error submitting prompt session: %s", err)
		return None
	return _to_submitted(row)


def list_prompt_sessions(db: Session, *, limit: Optional[int] = None) -> List[SubmittedPrompt]:
	query = db.query(PromptSessionRecord).order_by(PromptSessionRecord.submitted_at.desc())
	if limit:
		query = query.limit(limit)
	return [_to_submitted(row) for row in query.all()]


def get_prompt_session(db: Session, record_id: str) -> Optional[SubmittedPrompt]:
	row = db.get(PromptSessionRecord, record_id)
	if row is None:
		return None
	return _to_submitted(row)
