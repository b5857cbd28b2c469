from __future__ import annotations
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..analysis import generate_analysis
from ..errors import GenerationError
from ..formatter import render
from ..mock_data import generate_mock_analysis
from ..openai_client import OpenAIClient, is_valid_api_key_format
from ..schemas import Analysis, Presentation
from ..session import get_session, save_session
from .credentials import credential_warning, resolve_api_key
from .responses import simulate_delay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


class AnalysisRequest(BaseModel):
	session_id: str
	question: str


class AnalysisResponse(BaseModel):
	session_id: str
	mode: str
	analysis: Analysis
	presentation: Presentation
	error: Optional[str] = None


class RenderRequest(BaseModel):
	text: str


@router.post("", response_model=AnalysisResponse)
async def analyze(req: AnalysisRequest, api_key: Optional[str] = Depends(resolve_api_key)):
	follow_up = (req.question or "").strip()
	if not follow_up:
		raise HTTPException(status_code=400, detail="question is required")
	ctx = get_session(req.session_id)
	if not ctx:
		raise HTTPException(status_code=404, detail="Session not found")
	if not ctx.responses or not ctx.question:
		raise HTTPException(status_code=400, detail="Generate student responses before asking for analysis")
	responses = list(ctx.responses)
	analysis: Optional[Analysis] = None
	error: Optional[str] = None
	mode = "mock"
	if is_valid_api_key_format(api_key):
		client = OpenAIClient(api_key)
		try:
			analysis = await generate_analysis(ctx.question, responses, follow_up, client)
			mode = "live"
		except GenerationError as e:
			logger.warning("OpenAI API error during analysis, falling back to mock analysis: %s", e)
			error = f"Analysis failed: {e}"
		finally:
			await client.aclose()
	if analysis is None:
		if error is None:
			error = credential_warning(api_key)
		await simulate_delay()
		analysis = generate_mock_analysis(ctx.question, responses, follow_up)
	# A newer batch may have replaced this one meanwhile; last write wins
	ctx = save_session(ctx.with_analysis(analysis))
	return AnalysisResponse(
		session_id=ctx.session_id,
		mode=mode,
		analysis=analysis,
		presentation=render(analysis.response),
		error=error,
	)


@router.post("/render", response_model=Presentation)
def render_text(req: RenderRequest):
	return render(req.text)
