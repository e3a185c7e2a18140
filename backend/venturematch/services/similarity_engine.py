"""Idea Similarity Engine.

Ranks a candidate pool against a target idea by field equality
(category, audience, stage, business model) plus Jaccard overlap of
extracted keywords. Target-centric and O(pool × keywords); no index is
needed at marketplace volumes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..constants import (
    DEFAULT_SIMILAR_RESULTS,
    SIMILAR_KEYWORD_REASON_THRESHOLD,
    SIMILARITY_KEYWORD_LIMIT,
    SIMILARITY_THRESHOLD,
    SIMILARITY_WEIGHTS,
)
from ..schemas.evaluation_schema import SimilarityScore
from .text_features import extract_keywords, field

TARGET_KEYWORD_FIELDS = ("title", "tagline", "problem_statement", "proposed_solution")
CANDIDATE_KEYWORD_FIELDS = ("title", "tagline", "description", "problem_statement", "proposed_solution")


def idea_identifier(idea: Any) -> str:
    """Return the idea's ``id`` (or Mongo-style ``_id``) as text, ``""`` if absent."""
    if idea is None:
        return ""
    if isinstance(idea, Mapping):
        raw = idea.get("id") or idea.get("_id")
    else:
        raw = getattr(idea, "id", None) or getattr(idea, "_id", None)
    return "" if raw is None else str(raw)


def idea_keywords(idea: Any, fields: Iterable[str]) -> list[str]:
    keywords: list[str] = []
    for key in fields:
        keywords.extend(extract_keywords(field(idea, key), limit=SIMILARITY_KEYWORD_LIMIT))
    return keywords


def jaccard_similarity(first: Iterable[str], second: Iterable[str]) -> float:
    """|A ∩ B| / |A ∪ B|, or 0 when either side is empty."""
    a, b = set(first), set(second)
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def _same(target: Any, candidate: Any, key: str) -> str:
    """The shared value of *key* when both ideas carry the same non-empty value."""
    value = field(target, key)
    return value if value and value == field(candidate, key) else ""


def score_candidate(target: Any, target_keywords: list[str], candidate: Any) -> SimilarityScore:
    candidate_keywords = idea_keywords(candidate, CANDIDATE_KEYWORD_FIELDS)
    score = 0.0
    reasons: list[str] = []

    category = _same(target, candidate, "category")
    if category:
        score += SIMILARITY_WEIGHTS["category"]
        reasons.append(f"Same category: {category}")

    keyword_sim = jaccard_similarity(target_keywords, candidate_keywords)
    score += keyword_sim * SIMILARITY_WEIGHTS["keywords"]
    if keyword_sim > SIMILAR_KEYWORD_REASON_THRESHOLD:
        candidate_set = set(candidate_keywords)
        common = list(dict.fromkeys(kw for kw in target_keywords if kw in candidate_set))
        if common:
            reasons.append(f"Similar keywords: {', '.join(common[:3])}")

    audience = _same(target, candidate, "target_audience")
    if audience:
        score += SIMILARITY_WEIGHTS["target_audience"]
        reasons.append(f"Same target audience: {audience}")

    stage = _same(target, candidate, "stage")
    if stage:
        score += SIMILARITY_WEIGHTS["stage"]
        reasons.append(f"Same development stage: {stage}")

    business_model = _same(target, candidate, "business_model")
    if business_model:
        score += SIMILARITY_WEIGHTS["business_model"]
        reasons.append(f"Same business model: {business_model}")

    return SimilarityScore(
        idea_id=idea_identifier(candidate),
        score=score,
        similarities=reasons,
        idea=candidate,
    )


def find_similar_ideas(
    target: Any,
    pool: Iterable[Any],
    max_results: int = DEFAULT_SIMILAR_RESULTS,
) -> list[SimilarityScore]:
    """Return up to *max_results* candidates most similar to *target*.

    The target itself is never returned. Only candidates scoring above
    ``SIMILARITY_THRESHOLD`` are kept; ties keep their pool order.
    """
    target_id = idea_identifier(target)
    target_keywords = idea_keywords(target, TARGET_KEYWORD_FIELDS)

    scored = [
        score_candidate(target, target_keywords, candidate)
        for candidate in pool
        if candidate is not target and not (target_id and idea_identifier(candidate) == target_id)
    ]
    matches = [s for s in scored if s.score > SIMILARITY_THRESHOLD]
    matches.sort(key=lambda s: s.score, reverse=True)
    return matches[: max(0, max_results)]


def similarity_label(score: float) -> str:
    if score >= 0.7:
        return "Very Similar"
    if score >= 0.5:
        return "Moderately Similar"
    if score >= 0.3:
        return "Somewhat Similar"
    return "Loosely Related"
