from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from ..db import get_db
from ..gallery import (
	PromptSession,
	SubmittedPrompt,
	get_prompt_session,
	list_prompt_sessions,
	submit_prompt_session,
)
from ..schemas import StudentResponse
from ..session import SessionContext, get_session, save_session
from .responses import SessionPayload, session_payload

router = APIRouter(prefix="/gallery", tags=["gallery"])


class SubmitRequest(BaseModel):
	title: str
	submitted_by: Optional[str] = None
	# Either point at a live session...
	session_id: Optional[str] = None
	# ...or send the content directly
	question: Optional[str] = None
	student_responses: Optional[List[StudentResponse]] = None
	analysis_question: Optional[str] = None
	analysis_result: Optional[str] = None


def _build_session(req: SubmitRequest) -> PromptSession:
	if req.session_id:
		ctx = get_session(req.session_id)
		if not ctx:
			raise HTTPException(status_code=404, detail="Session not found")
		question = ctx.question
		responses = list(ctx.responses)
		analysis_question = ctx.analysis.question if ctx.analysis else None
		analysis_result = ctx.analysis.response if ctx.analysis else None
	else:
		question = req.question
		responses = req.student_responses or []
		analysis_question = req.analysis_question
		analysis_result = req.analysis_result
	if not question or not responses:
		raise HTTPException(status_code=400, detail="question and student_responses are required")
	try:
		return PromptSession(
			title=req.title.strip(),
			question=question,
			student_responses=responses,
			analysis_question=analysis_question,
			analysis_result=analysis_result,
			submitted_by=req.submitted_by,
		)
	except ValidationError as e:
		raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=SubmittedPrompt, status_code=201)
def submit(req: SubmitRequest, db: Session = Depends(get_db)):
	if not (req.title or "").strip():
		raise HTTPException(status_code=400, detail="Please enter a title for this prompt")
	session = _build_session(req)
	saved = submit_prompt_session(db, session)
	if saved is None:
		raise HTTPException(status_code=500, detail="Failed to submit prompt. Please try again.")
	return saved


@router.get("", response_model=List[SubmittedPrompt])
def list_submitted(limit: Optional[int] = None, db: Session = Depends(get_db)):
	return list_prompt_sessions(db, limit=limit)


@router.get("/{record_id}", response_model=SubmittedPrompt)
def get_submitted(record_id: str, db: Session = Depends(get_db)):
	record = get_prompt_session(db, record_id)
	if record is None:
		raise HTTPException(status_code=404, detail="Prompt not found")
	return record


@router.post("/{record_id}/remix", response_model=SessionPayload)
def remix(record_id: str, db: Session = Depends(get_db)):
	record = get_prompt_session(db, record_id)
	if record is None:
		raise HTTPException(status_code=404, detail="Could not load the selected prompt. It may have been deleted.")
	ctx = SessionContext().remixed(record.id, record.question, record.student_responses, record.analysis)
	save_session(ctx)
	return session_payload(ctx)
