"""
Output parsing and quality heuristics for generated student answers.

``parse_student_answers`` turns the free-form reply of the generation service
into exactly ``expected_count`` answer strings. It is best-effort and never
raises: three strategies are tried in order (numbered list, lines, paragraphs)
and the first one that yields enough answers wins. If none does, the richest
attempt is used and padded with ``PLACEHOLDER_ANSWER``.

``assess_quality`` is a lightweight lexical scorer mapping an answer to
strong / average / weak.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional

from .schemas import Quality

logger = logging.getLogger(__name__)


PLACEHOLDER_ANSWER = "I'm not sure about this one - I would need to ask for guidance."
MIN_ANSWER_CHARS = 10

_NUMBERED_LINE = re.compile(r"^[ \t]*\d+\.?[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_PURE_NUMBERING = re.compile(r"^\(?\d+[.)]?\)?$")
_LEADING_NUMBERING = re.compile(r"^\s*(?:\(\d+\)|\d+[.)])\s*")
_BOILERPLATE = re.compile(
	r"^(?:here\s+(?:are|is)\b|(?:simulated\s+)?(?:student\s+)?(?:responses|answers)\s*:)",
	re.IGNORECASE,
)
_BLANK_LINE = re.compile(r"\n\s*\n")


# ============================================================================
# OUTPUT PARSER
# ============================================================================

def _strip_numbering(text: str) -> str:
	return _LEADING_NUMBERING.sub("", text, count=1).strip()


def _numbered_strategy(raw: str) -> List[str]:
	return [m.group(1).strip() for m in _NUMBERED_LINE.finditer(raw) if m.group(1).strip()]


def _line_strategy(raw: str) -> List[str]:
	answers: List[str] = []
	for line in raw.splitlines():
		line = line.strip()
		if not line or _PURE_NUMBERING.match(line) or _BOILERPLATE.match(line):
			continue
		content = _strip_numbering(line)
		if len(content) > MIN_ANSWER_CHARS:
			answers.append(content)
	return answers


def _paragraph_strategy(raw: str) -> List[str]:
	answers: List[str] = []
	for block in _BLANK_LINE.split(raw):
		content = _strip_numbering(block.strip())
		if len(content) > MIN_ANSWER_CHARS:
			answers.append(content)
	return answers


STRATEGIES: List[Callable[[str], List[str]]] = [
	_numbered_strategy,
	_line_strategy,
	_paragraph_strategy,
]


def parse_student_answers(raw: str, expected_count: int) -> List[str]:
	"""Split a generation reply into exactly ``expected_count`` answers.

	Strategies are not merged; each attempt starts from the raw text again.
	"""
	raw = raw or ""
	best: Optional[List[str]] = None
	for strategy in STRATEGIES:
		answers = strategy(raw)
		if len(answers) >= expected_count:
			best = answers
			break
		if best is None or len(answers) > len(best):
			best = answers
	answers = list(best or [])
	if len(answers) < expected_count:
		logger.debug("Parsed %d of %d answers; padding with placeholders", len(answers), expected_count)
	while len(answers) < expected_count:
		answers.append(PLACEHOLDER_ANSWER)
	return answers[:expected_count]


# ============================================================================
# QUALITY CLASSIFIER
# ============================================================================

_CONNECTIVES = ("because", "therefore", "however")
_EXAMPLES = ("for example", "such as")
_CONCLUSIONS = ("in conclusion", "overall")
_HEDGES = ("i think maybe", "not sure", "i guess")
_IGNORANCE = ("idk", "don't know")
_DISMISSIVE = ("boring", "stupid", "dumb")


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
	return any(p in text for p in phrases)


def quality_score(answer: str) -> int:
	text = answer.lower()
	length = len(answer)
	score = 0
	# Length and detail
	if length > 100:
		score += 2
	elif length > 50:
		score += 1
	# Reasoning markers
	if _contains_any(text, _CONNECTIVES):
		score += 1
	if _contains_any(text, _EXAMPLES):
		score += 1
	if "first" in text and "second" in text:
		score += 1
	if _contains_any(text, _CONCLUSIONS):
		score += 1
	# Uncertainty
	if _contains_any(text, _HEDGES):
		score -= 1
	if _contains_any(text, _IGNORANCE):
		score -= 2
	# Very short or dismissive
	if length < 20:
		score -= 2
	if _contains_any(text, _DISMISSIVE):
		score -= 1
	return score


def assess_quality(answer: str, question: str = "") -> Quality:
	# The question is accepted for interface parity; scoring is lexical only
	score = quality_score(answer)
	if score >= 3:
		return "strong"
	if score <= 0:
		return "weak"
	return "average"
