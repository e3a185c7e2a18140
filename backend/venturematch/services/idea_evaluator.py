"""Deterministic Idea Evaluator.

Combines text-feature signals into eight subscores in [0, 1] and a single
0-100 composite score using the fixed weights in
``constants.EVALUATION_WEIGHTS``.

Rules
-----
- NO API calls
- NO DB writes
- NO randomness: identical input gives identical output
- Never raises on missing or malformed fields
"""

from __future__ import annotations

import math
import re
from typing import Any

from ..constants import (
    DEFAULT_STAGE_FEASIBILITY,
    DEMO_URL_FEASIBILITY_BONUS,
    EVALUATION_WEIGHTS,
    STAGE_FEASIBILITY,
)
from ..schemas.evaluation_schema import EvaluationBreakdown, EvaluationResult
from .text_features import (
    avg_sentence_length,
    count_all_caps_words,
    field,
    has_numbers,
    has_repeated_chars,
    is_url_only,
)

_LARGE_MARKET_RE = re.compile(r"Large|>\s*\$?10B", re.IGNORECASE)
_MEDIUM_MARKET_RE = re.compile(r"Medium|\$?1B\s*-\s*\$?10B", re.IGNORECASE)
_TRACTION_RE = re.compile(r"users?|mrr|revenue|signup|waitlist|pilot|poc", re.IGNORECASE)

WARNING_COMPLETENESS = "Complete all required sections to improve score."
WARNING_CLARITY = "Clarify problem and solution with concrete sentences and examples."
WARNING_DIFFERENTIATION = "Explain how you differ from competitors more clearly."
WARNING_TRACTION = "Add customer validation or traction metrics."

NARRATIVE_FIELDS = ("title", "tagline", "problem_statement", "proposed_solution", "uniqueness")


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def length_quality(text: str, minimum: int, good: int) -> float:
    """0 for empty text, 0.2 below *minimum*, 0.7 below *good*, else 1.0."""
    length = len(text.strip())
    if length <= 0:
        return 0.0
    if length < minimum:
        return 0.2
    if length < good:
        return 0.7
    return 1.0


def completeness_score(texts: list[str]) -> float:
    return sum(1 for t in texts if t.strip()) / len(texts)


def clarity_score(problem: str, solution: str) -> float:
    samples = [n for n in (avg_sentence_length(problem), avg_sentence_length(solution)) if n > 0]
    if not samples:
        raw = 0.0
    else:
        # ideal average sentence length is roughly 12-24 words
        avg = sum(samples) / len(samples)
        if avg < 8:
            raw = 0.5
        elif avg <= 28:
            raw = 1.0
        elif avg <= 40:
            raw = 0.7
        else:
            raw = 0.4
    penalty = 0.2 if has_repeated_chars(problem + solution) else 0.0
    return max(0.0, raw - penalty)


def market_potential_score(market_size: str) -> float:
    if _LARGE_MARKET_RE.search(market_size):
        return 1.0
    if _MEDIUM_MARKET_RE.search(market_size):
        return 0.7
    return 0.4 if market_size else 0.2


def traction_score(validation: str) -> float:
    score = 0.0
    if len(validation) > 20:
        score += 0.4
    if has_numbers(validation):
        score += 0.3
    if _TRACTION_RE.search(validation):
        score += 0.3
    return min(1.0, score)


def feasibility_score(stage: str, demo_url: str) -> float:
    base = STAGE_FEASIBILITY.get(stage)
    if base is None:
        base = STAGE_FEASIBILITY.get(stage.lower(), DEFAULT_STAGE_FEASIBILITY)
    if demo_url:
        return min(1.0, base + DEMO_URL_FEASIBILITY_BONUS)
    return base


def professionalism_score(texts: list[str], tagline: str) -> float:
    text = " ".join(texts)
    penalty = min(0.4, count_all_caps_words(text) * 0.05)
    if is_url_only(tagline):
        penalty += 0.3
    if has_repeated_chars(text):
        penalty += 0.3
    return max(0.0, 1.0 - penalty)


def evaluate_idea(idea: Any) -> EvaluationResult:
    """Score *idea* on a 0-100 scale.

    Parameters
    ----------
    idea : mapping or object
        Raw idea fields (snake_case). Missing fields are treated as empty.

    Returns
    -------
    EvaluationResult
        Composite score, eight-way breakdown, and ordered warnings. An idea
        with none of the narrative fields filled in scores 0.
    """
    title, tagline, problem, solution, uniqueness = (field(idea, k) for k in NARRATIVE_FIELDS)
    narrative = [title, tagline, problem, solution, uniqueness]

    breakdown = EvaluationBreakdown(
        completeness=completeness_score(narrative),
        clarity=clarity_score(problem, solution),
        differentiation=length_quality(uniqueness, 20, 80),
        market_potential=market_potential_score(field(idea, "market_size")),
        traction=traction_score(field(idea, "customer_validation")),
        feasibility=feasibility_score(
            field(idea, "stage") or field(idea, "current_progress"),
            field(idea, "demo_url"),
        ),
        business_model=0.8 if field(idea, "business_model") else 0.3,
        professionalism=professionalism_score(narrative, tagline),
    )

    values = breakdown.model_dump()
    weighted = sum(EVALUATION_WEIGHTS[name] * values[name] for name in EVALUATION_WEIGHTS)
    if breakdown.completeness == 0:
        score = 0
    else:
        score = int(_clamp(_round_half_up(weighted * 100), 0, 100))

    warnings: list[str] = []
    if breakdown.completeness < 0.6:
        warnings.append(WARNING_COMPLETENESS)
    if breakdown.clarity < 0.6:
        warnings.append(WARNING_CLARITY)
    if breakdown.differentiation < 0.6:
        warnings.append(WARNING_DIFFERENTIATION)
    if breakdown.traction < 0.5:
        warnings.append(WARNING_TRACTION)

    return EvaluationResult(score=score, breakdown=breakdown, warnings=warnings)
