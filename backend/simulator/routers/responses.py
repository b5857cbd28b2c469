from __future__ import annotations
import asyncio
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..errors import GenerationError
from ..formatter import render
from ..openai_client import OpenAIClient
from ..schemas import Analysis, Presentation, StudentResponse, response_summary
from ..session import SessionContext, get_or_create_session, get_session, save_session
from ..settings import settings
from ..synthesizer import MAX_RESPONSES, MIN_RESPONSES, Mode, resolve_mode, synthesize
from .credentials import credential_warning, resolve_api_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/responses", tags=["responses"])


class GenerateRequest(BaseModel):
	question: str
	number_of_responses: int = Field(default=10, ge=MIN_RESPONSES, le=MAX_RESPONSES)
	session_id: Optional[str] = None


class SessionPayload(BaseModel):
	session_id: str
	question: Optional[str] = None
	mode: Optional[str] = None
	responses: List[StudentResponse]
	summary: Dict[str, int]
	analysis: Optional[Analysis] = None
	presentation: Optional[Presentation] = None
	remixed_from: Optional[str] = None
	# Non-fatal: shown as a dismissible banner while mock data fills in
	error: Optional[str] = None


def session_payload(ctx: SessionContext, *, error: Optional[str] = None) -> SessionPayload:
	responses = list(ctx.responses)
	return SessionPayload(
		session_id=ctx.session_id,
		question=ctx.question,
		mode=ctx.mode,
		responses=responses,
		summary=response_summary(responses),
		analysis=ctx.analysis,
		presentation=render(ctx.analysis.response) if ctx.analysis else None,
		remixed_from=ctx.remixed_from,
		error=error,
	)


async def simulate_delay() -> None:
	if settings.mock_delay_seconds > 0:
		await asyncio.sleep(settings.mock_delay_seconds)


@router.post("/generate", response_model=SessionPayload)
async def generate(req: GenerateRequest, api_key: Optional[str] = Depends(resolve_api_key)):
	question = (req.question or "").strip()
	if not question:
		raise HTTPException(status_code=400, detail="question is required")
	count = req.number_of_responses
	mode = resolve_mode(question, api_key)
	error = credential_warning(api_key) if mode is Mode.MOCK else None
	responses: Optional[List[StudentResponse]] = None
	if mode is Mode.LIVE:
		client = OpenAIClient(api_key)
		try:
			responses = await synthesize(question, count, mode, client=client)
		except GenerationError as e:
			logger.warning("OpenAI API error, falling back to mock responses: %s", e)
			error = str(e)
			mode = Mode.MOCK
		finally:
			await client.aclose()
	if responses is None:
		await simulate_delay()
		responses = await synthesize(question, count, mode)
	ctx = get_or_create_session(req.session_id).with_responses(question, responses, mode=mode.value)
	save_session(ctx)
	return session_payload(ctx, error=error)


@router.get("/session/state", response_model=SessionPayload)
async def get_state(session_id: str):
	ctx = get_session(session_id)
	if not ctx:
		raise HTTPException(status_code=404, detail="Session not found")
	return session_payload(ctx)
