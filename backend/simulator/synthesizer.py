"""
Response Synthesizer
====================

Produces a batch of exactly ``count`` student responses for a question.

Modes:
- demo: curated responses for catalog questions, topped up with mock data
- mock: tiered template generation (see ``mock_data``)
- live: one call to the generation service, parsed and quality-scored

Live-mode failures propagate as ``GenerationError``; falling back to mock data
is the caller's job.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, Optional

from .demo_data import get_demo_responses
from .mock_data import generate_mock_responses
from .openai_client import OpenAIClient, is_valid_api_key_format
from .parsing import assess_quality, parse_student_answers
from .prompts import build_generation_request
from .schemas import StudentResponse

logger = logging.getLogger(__name__)

MIN_RESPONSES = 1
MAX_RESPONSES = 50


class Mode(str, Enum):
	DEMO = "demo"
	MOCK = "mock"
	LIVE = "live"


def resolve_mode(question: str, api_key: Optional[str]) -> Mode:
	if get_demo_responses(question) is not None:
		return Mode.DEMO
	if is_valid_api_key_format(api_key):
		return Mode.LIVE
	return Mode.MOCK


def _demo_responses(question: str, count: int, rng: random.Random) -> List[StudentResponse]:
	curated = get_demo_responses(question) or []
	if count <= len(curated):
		return curated[:count]
	extra = generate_mock_responses(question, count - len(curated), rng=rng)
	# Padded entries continue the curated id sequence
	padded = [r.model_copy(update={"id": len(curated) + i + 1}) for i, r in enumerate(extra)]
	return curated + padded


async def _live_responses(question: str, count: int, client: OpenAIClient) -> List[StudentResponse]:
	request = build_generation_request(question, count)
	raw = await client.chat(request.messages, max_tokens=request.max_tokens, temperature=request.temperature)
	answers = parse_student_answers(raw, count)
	return [
		StudentResponse(id=i + 1, content=content.strip(), quality=assess_quality(content, question))
		for i, content in enumerate(answers)
	]


async def synthesize(
	question: str,
	count: int,
	mode: Mode,
	*,
	client: Optional[OpenAIClient] = None,
	rng: Optional[random.Random] = None,
) -> List[StudentResponse]:
	if not question or not question.strip():
		raise ValueError("question is required")
	if count < MIN_RESPONSES or count > MAX_RESPONSES:
		raise ValueError(f"count must be {MIN_RESPONSES}..{MAX_RESPONSES}")
	rng = rng or random.Random()
	mode = Mode(mode)
	if mode is Mode.DEMO:
		responses = _demo_responses(question, count, rng)
	elif mode is Mode.LIVE:
		if client is None:
			raise ValueError("live mode requires a client")
		responses = await _live_responses(question, count, client)
	else:
		responses = generate_mock_responses(question, count, rng=rng)
	logger.info("Synthesized %d responses (mode=%s)", len(responses), mode.value)
	return responses
