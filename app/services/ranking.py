# app/services/ranking.py
"""
Tutor ranking for a free-text problem description.

The generative API orders the candidates; when that fails for any reason
the keyword-overlap scorer below is used instead. Ranking is advisory and
``TutorRanker.rank`` never raises.
"""
import json
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from app.core.exceptions import FeatureUnavailable
from app.services.llm import GenerationError, GenerativeClient, strip_code_fence

logger = logging.getLogger(__name__)

FALLBACK_MATCH_CONFIDENCE = 0.6
FALLBACK_NO_MATCH_CONFIDENCE = 0.3

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"

PROMPT_TEMPLATE = """
You are an intelligent tutor matching system for a student peer-learning platform.

Given the following problem description:
"{problem}"

And these available tutors with their skills:
{tutors}

Task:
1. Analyze the problem and identify the subject/skill area needed
2. Rank the tutors from most to least suitable (1 being best match)
3. Provide a confidence score (0-100) for the overall matching

Respond ONLY in this JSON format:
{{
  "rankedTutorIds": ["tutor1_id", "tutor2_id", ...],
  "confidence": 85,
  "reasoning": "Brief explanation of why top tutor is best match"
}}
"""


@dataclass
class RankingResult:
    tutors: list
    confidence: float
    source: str
    reasoning: Optional[str] = None


def build_prompt(problem: str, candidates: Sequence) -> str:
    lines = [
        f"{idx}. [id: {c.id}] {c.name} - Skills: {', '.join(c.skills)}"
        for idx, c in enumerate(candidates, start=1)
    ]
    return PROMPT_TEMPLATE.format(problem=problem, tutors="\n".join(lines))


def keyword_overlap_rank(problem: str, candidates: Sequence) -> RankingResult:
    """
    Scores each candidate by how many whitespace-separated problem words
    occur in its lower-cased skill text. Equal scores keep input order.
    """
    keywords = problem.lower().split()

    scored = []
    for candidate in candidates:
        skills_text = " ".join(candidate.skills).lower()
        score = sum(1 for keyword in keywords if keyword in skills_text)
        scored.append((score, candidate))

    # sorted() is stable, so ties keep their original order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)

    top = scored[0][0] if scored else 0
    return RankingResult(
        tutors=[candidate for _, candidate in scored],
        confidence=FALLBACK_MATCH_CONFIDENCE if top > 0 else FALLBACK_NO_MATCH_CONFIDENCE,
        source=SOURCE_FALLBACK,
    )


def parse_ai_ranking(text: str, candidates: Sequence) -> RankingResult:
    """Raises ValueError/TypeError/KeyError when the reply is not the expected JSON."""
    payload = json.loads(strip_code_fence(text))
    ranked_ids = payload["rankedTutorIds"]
    confidence = float(payload["confidence"])
    if not isinstance(ranked_ids, list):
        raise TypeError("rankedTutorIds must be a list")
    if not math.isfinite(confidence) or not 0 <= confidence <= 100:
        raise ValueError(f"confidence out of range: {confidence}")

    by_id = {str(c.id): c for c in candidates}
    ranked = []
    seen = set()
    for tutor_id in ranked_ids:
        key = str(tutor_id)
        if key in by_id and key not in seen:
            seen.add(key)
            ranked.append(by_id[key])

    reasoning = payload.get("reasoning")
    return RankingResult(
        tutors=ranked,
        confidence=confidence / 100,
        source=SOURCE_AI,
        reasoning=reasoning if isinstance(reasoning, str) else None,
    )


class TutorRanker:
    def __init__(self, client: Optional[GenerativeClient]):
        self.client = client

    def rank(self, problem: str, candidates: Sequence) -> RankingResult:
        candidates = list(candidates)
        try:
            if self.client is None:
                raise FeatureUnavailable("No generative client")
            reply = self.client.generate(build_prompt(problem, candidates))
            return parse_ai_ranking(reply, candidates)
        except (FeatureUnavailable, GenerationError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("AI tutor matching failed, using keyword fallback: %s", e)

        try:
            return keyword_overlap_rank(problem, candidates)
        except (TypeError, AttributeError):
            logger.exception("Keyword fallback failed, keeping original order")
            return RankingResult(
                tutors=candidates,
                confidence=FALLBACK_NO_MATCH_CONFIDENCE,
                source=SOURCE_FALLBACK,
            )
