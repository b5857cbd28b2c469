from __future__ import annotations

import logging
from typing import List

from .openai_client import OpenAIClient
from .prompts import build_analysis_request
from .schemas import Analysis, StudentResponse

logger = logging.getLogger(__name__)


async def generate_analysis(
	original_question: str,
	responses: List[StudentResponse],
	analysis_question: str,
	client: OpenAIClient,
) -> Analysis:
	"""One analysis round trip. Errors propagate; callers fall back to mock analysis."""
	request = build_analysis_request(original_question, responses, analysis_question)
	text = await client.chat(request.messages, max_tokens=request.max_tokens, temperature=request.temperature)
	logger.info("Analysis generated for %d responses (%d chars)", len(responses), len(text))
	return Analysis(question=analysis_question, response=text)
