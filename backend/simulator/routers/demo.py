import random

from fastapi import APIRouter

from ..demo_data import ANALYSIS_PROMPTS, DEMO_QUESTIONS

router = APIRouter(prefix="/demo", tags=["demo"])


@router.get("/questions")
def get_questions():
	return {"questions": DEMO_QUESTIONS}


@router.get("/questions/random")
def get_random_question():
	return {"question": random.choice(DEMO_QUESTIONS)}


@router.get("/prompts")
def get_analysis_prompts():
	return {"categories": ANALYSIS_PROMPTS}
