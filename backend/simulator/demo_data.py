"""Demo catalog: sample questions, a curated response set, and suggested analysis prompts."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .schemas import StudentResponse


DEMO_QUESTIONS: List[str] = [
	"What is photosynthesis and why is it important for life on Earth?",
	"Explain the water cycle in your own words.",
	"What causes the seasons on Earth?",
	"How does gravity work and why don't we float away?",
	"What is the difference between weather and climate?",
	"Explain how plants get their energy to grow.",
	"Why do we have day and night?",
	"What happens to water when it evaporates?",
]

_PHOTOSYNTHESIS: List[Tuple[str, str]] = [
	(
		"Photosynthesis is the process where plants use sunlight, water, and carbon dioxide to make their own food (glucose) and release oxygen as a byproduct. This is crucial for life because it provides oxygen for animals to breathe and forms the base of food chains. Plants convert light energy into chemical energy, which sustains most ecosystems on Earth.",
		"strong",
	),
	(
		"Photosynthesis is when plants make food using sunlight. They take in CO2 and water and make sugar and oxygen. It's important because animals need the oxygen to breathe and we eat plants for energy.",
		"average",
	),
	(
		"Plants do photosynthesis to make food from the sun. They breathe in oxygen and breathe out carbon dioxide, kind of like the opposite of humans. It's important because plants give us food.",
		"weak",
	),
	(
		"Photosynthesis occurs in chloroplasts using chlorophyll to capture light energy. The process involves light-dependent and light-independent reactions, ultimately converting CO2 and H2O into glucose while releasing O2. This process is fundamental to life as it produces virtually all atmospheric oxygen and forms the foundation of food webs through primary production.",
		"strong",
	),
	(
		"Plants use photosynthesis to get energy from sunlight. They need water and carbon dioxide too. The oxygen they make is good for us to breathe. Without plants doing this, we wouldn't have enough oxygen.",
		"average",
	),
	(
		"I think photosynthesis is how plants eat sunlight? Like they absorb it through their leaves and then they can grow. It's important because plants make oxygen and we need oxygen to live. Without plants we would all die.",
		"weak",
	),
	(
		"Photosynthesis is a biochemical process that occurs in the chloroplasts of plant cells, where chlorophyll captures photons and converts them into chemical energy. This process not only produces glucose for plant metabolism but also releases oxygen as a waste product, which has fundamentally shaped Earth's atmosphere and enabled aerobic life to evolve.",
		"strong",
	),
	(
		"Plants do photosynthesis to make their food. They use sun, water, and air to do this. The oxygen they make helps animals breathe. It's really important for all living things.",
		"average",
	),
	(
		"Photosynthesis is when plants turn sunlight into sugar. I think it happens in the green parts of plants. Plants are important because they clean the air and give us oxygen to breathe.",
		"average",
	),
	(
		"Plants eat sunlight and water and make oxygen. That's photosynthesis. It's important because animals need oxygen and plants need to eat too. I don't really know much more about it.",
		"weak",
	),
	(
		"Photosynthesis is the fundamental process by which autotrophic organisms convert inorganic compounds into organic matter using light energy. This process involves two main stages: the light reactions and the Calvin cycle, resulting in the production of glucose and the release of oxygen, which is essential for maintaining atmospheric balance.",
		"strong",
	),
	(
		"Plants need sunlight to make their own food through photosynthesis. They also need carbon dioxide and water. When they do this, they release oxygen which is what we breathe. So photosynthesis is really important for keeping us alive.",
		"average",
	),
	(
		"I'm not really sure how photosynthesis works but I know plants need sunlight. Maybe they absorb it somehow? It's important because plants give us food and oxygen I think.",
		"weak",
	),
	(
		"Photosynthesis allows plants to synthesize organic compounds from carbon dioxide and water using light energy, typically from the sun. This process occurs primarily in the leaves and involves chlorophyll molecules that absorb light. The oxygen produced is essential for respiration in most living organisms.",
		"strong",
	),
	(
		"Photosynthesis is how plants make food from sunlight. They take in carbon dioxide from the air and water from their roots. The energy from sunlight helps them combine these to make sugar for food. As a bonus, they release oxygen that animals need to breathe.",
		"average",
	),
]

_CURATED: Dict[str, List[Tuple[str, str]]] = {
	DEMO_QUESTIONS[0]: _PHOTOSYNTHESIS,
}


def get_demo_responses(question: str) -> Optional[List[StudentResponse]]:
	# Exact match only; the catalog is keyed by the literal question text
	entries = _CURATED.get(question)
	if entries is None:
		return None
	return [
		StudentResponse(id=i + 1, content=content, quality=quality)
		for i, (content, quality) in enumerate(entries)
	]


ANALYSIS_PROMPTS: List[dict] = [
	{
		"category": "Insight & Summary",
		"prompts": [
			{
				"title": "Summarize Student Understanding",
				"text": "Summarize the overall understanding students demonstrated in their responses. Highlight common correct ideas and misconceptions.",
				"description": "Quickly gauge class-wide comprehension",
			},
			{
				"title": "Identify Misconceptions",
				"text": "What are the most common misconceptions or errors found in the student responses?",
				"description": "Prioritize reteaching or targeted intervention",
			},
			{
				"title": "Group by Understanding Level",
				"text": "Cluster student responses into groups: correct understanding, partial understanding, and incorrect or confused responses.",
				"description": "Tailor feedback and group instruction",
			},
		],
	},
	{
		"category": "Feedback & Grading",
		"prompts": [
			{
				"title": "Suggest Rubric Scores",
				"text": "Assign a rubric score (0-3) to each student response and explain the reasoning.",
				"description": "Speed up grading or double-check manual scores",
			},
			{
				"title": "Generate Individual Feedback",
				"text": "Generate brief, personalized feedback for each student based on their response.",
				"description": "Automate quality formative feedback",
			},
			{
				"title": "Highlight Exemplars",
				"text": "Which student responses best exemplify a strong answer? What makes them strong?",
				"description": "Share exemplar work with the class",
			},
		],
	},
	{
		"category": "Extension & Strategy",
		"prompts": [
			{
				"title": "Suggest Follow-Up Questions",
				"text": "Based on the student responses, what are good follow-up questions or extension tasks to deepen their thinking?",
				"description": "Extend learning with minimal prep",
			},
			{
				"title": "Surface Meta-Cognitive Patterns",
				"text": "What do student responses suggest about how they are thinking about the problem (e.g., strategies, confidence, confusion points)?",
				"description": "Understand student problem-solving approaches",
			},
		],
	},
	{
		"category": "Technical Analysis",
		"prompts": [
			{
				"title": "Analyze Word Usage",
				"text": "What are the most frequently used words or phrases across all student answers? What do these suggest about their understanding?",
				"description": "Spot patterns in language tied to concepts",
			},
			{
				"title": "Compare to Model Answer",
				"text": "Compare each student response to the model answer. Identify which key components are missing or misapplied.",
				"description": "Target gaps explicitly",
			},
		],
	},
]
