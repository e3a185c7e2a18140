"""Optional AI review of an idea, with the heuristic evaluator as fallback.

STRICT RULES:
  - An external review only counts when it is well formed: a numeric
    ``totalScore`` plus a ``breakdown`` holding recognised subscore keys
  - Anything else (no key configured, HTTP failure, malformed JSON) falls
    back to ``evaluate_idea``
  - Never raises to callers
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional

from ..constants import AI_REVIEW_BREAKDOWN_KEYS
from ..schemas.evaluation_schema import IdeaScore
from .idea_evaluator import evaluate_idea
from .openai_client import get_openai_key, request_json_completion
from .text_features import field

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = "You are a startup evaluator AI."


def _build_user_prompt(idea: Any) -> str:
    return f"""Analyze this startup idea based on real-world success potential. Provide a detailed analysis and a numeric score (0-100).
Return a JSON object strictly in this format:
{{ "totalScore": number, "breakdown": {{ "problem": number, "solution": number, "uniqueness": number, "market": number, "team": number, "viability": number }}, "suggestions": [string] }}

Idea details:
- Title: {field(idea, "title")}
- Tagline: {field(idea, "tagline")}
- Problem: {field(idea, "problem_statement")}
- Proposed Solution: {field(idea, "proposed_solution")}
- Uniqueness: {field(idea, "uniqueness")}
- Customer Validation: {field(idea, "customer_validation")}
- Market Size: {field(idea, "market_size")}
- Category: {field(idea, "category")}
- Team Background: {field(idea, "team_background") or "Not provided"}"""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def is_well_formed_review(payload: Any) -> bool:
    """True when *payload* has a numeric total and at least one known subscore."""
    if not isinstance(payload, Mapping) or not _is_number(payload.get("totalScore")):
        return False
    breakdown = payload.get("breakdown")
    if not isinstance(breakdown, Mapping):
        return False
    return any(key in AI_REVIEW_BREAKDOWN_KEYS and _is_number(value) for key, value in breakdown.items())


async def evaluate_with_ai(idea: Any) -> Optional[dict[str, Any]]:
    """Ask the configured model to review *idea*; None when unavailable."""
    if get_openai_key() is None:
        return None

    messages = [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {"role": "user", "content": _build_user_prompt(idea)},
    ]
    result = await request_json_completion(messages=messages, max_tokens=800)
    if result is None:
        logger.warning("AI review unavailable for idea %r, using heuristic score", field(idea, "title"))
        return None
    if not is_well_formed_review(result):
        logger.warning("AI review for idea %r was malformed, using heuristic score", field(idea, "title"))
        return None
    return result


def _coerce_suggestions(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw if item]
    return [str(raw)]


def resolve_score(idea: Any, external: Optional[Mapping[str, Any]] = None) -> IdeaScore:
    """Pick the score shown for *idea*.

    A well-formed *external* review takes precedence; otherwise the local
    evaluator's result is returned with its warnings as suggestions.
    """
    if external is not None and is_well_formed_review(external):
        breakdown = {
            str(key): float(value)
            for key, value in external["breakdown"].items()
            if _is_number(value)
        }
        return IdeaScore(
            score=max(0, min(100, int(round(external["totalScore"])))),
            source="ai",
            breakdown=breakdown,
            suggestions=_coerce_suggestions(external.get("suggestions")),
        )

    local = evaluate_idea(idea)
    return IdeaScore(
        score=local.score,
        source="heuristic",
        breakdown=local.breakdown.model_dump(),
        suggestions=list(local.warnings),
    )
