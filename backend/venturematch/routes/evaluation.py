"""Idea review routes: heuristic evaluation, SWOT, similar ideas.

The routes are thin: all scoring logic lives in the pure engine modules
under ``services``. Nothing here writes to the store.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..constants import DEFAULT_SIMILAR_RESULTS
from ..schemas.evaluation_schema import (
    EvaluationResult,
    IdeaReviewResponse,
    SimilarIdeaOut,
    SWOTAnalysis,
)
from ..services import idea_service
from ..services.ai_evaluator import evaluate_with_ai, resolve_score
from ..services.auth_dependency import Actor, get_optional_actor
from ..services.idea_evaluator import evaluate_idea
from ..services.idea_service import IdeaNotFound, PermissionDenied
from ..services.repositories import IdeaRepository, get_idea_repository
from ..services.similarity_engine import find_similar_ideas, similarity_label
from ..services.swot_generator import generate_swot
from .ideas import to_http_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ideas",
    tags=["Evaluation"],
)


def _load(repo: IdeaRepository, idea_id: str, actor: Optional[Actor]) -> dict:
    try:
        return idea_service.get_idea(repo, idea_id, actor)
    except (IdeaNotFound, PermissionDenied) as exc:
        raise to_http_error(exc) from exc


def _similar(repo: IdeaRepository, record: dict, actor: Optional[Actor], limit: int) -> List[SimilarIdeaOut]:
    pool = [r for r in repo.list() if idea_service.can_view(r, actor)]
    return [
        SimilarIdeaOut(
            idea_id=match.idea_id,
            score=round(match.score, 4),
            label=similarity_label(match.score),
            similarities=match.similarities,
            idea=idea_service.to_idea_out(match.idea),
        )
        for match in find_similar_ideas(record, pool, max_results=limit)
    ]


@router.get(
    "/{idea_id}/evaluation",
    response_model=EvaluationResult,
    summary="Heuristic evaluation of an idea",
)
def get_evaluation(
    idea_id: str,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Optional[Actor] = Depends(get_optional_actor),
) -> EvaluationResult:
    """Score, eight-way breakdown and warnings. Recomputed on every call."""
    return evaluate_idea(_load(repo, idea_id, actor))


@router.get(
    "/{idea_id}/swot",
    response_model=SWOTAnalysis,
    summary="SWOT analysis of an idea",
)
def get_swot(
    idea_id: str,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Optional[Actor] = Depends(get_optional_actor),
) -> SWOTAnalysis:
    return generate_swot(_load(repo, idea_id, actor))


@router.get(
    "/{idea_id}/similar",
    response_model=List[SimilarIdeaOut],
    summary="Ideas similar to this one",
)
def get_similar(
    idea_id: str,
    limit: int = Query(DEFAULT_SIMILAR_RESULTS, ge=1, le=50),
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Optional[Actor] = Depends(get_optional_actor),
) -> List[SimilarIdeaOut]:
    record = _load(repo, idea_id, actor)
    return _similar(repo, record, actor, limit)


@router.get(
    "/{idea_id}/review",
    response_model=IdeaReviewResponse,
    summary="Full review: score, suggestions, SWOT and similar ideas",
)
async def get_review(
    idea_id: str,
    limit: int = Query(DEFAULT_SIMILAR_RESULTS, ge=1, le=50),
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Optional[Actor] = Depends(get_optional_actor),
) -> IdeaReviewResponse:
    """An AI review, when configured and well formed, overrides the heuristic score."""
    record = _load(repo, idea_id, actor)

    external = await evaluate_with_ai(record)
    resolved = resolve_score(record, external)
    logger.info("Review for idea %s: score=%d source=%s", idea_id, resolved.score, resolved.source)

    return IdeaReviewResponse(
        idea_id=str(record["id"]),
        evaluation=evaluate_idea(record),
        resolved=resolved,
        suggestions=resolved.suggestions,
        swot=generate_swot(record),
        similar_ideas=_similar(repo, record, actor, limit),
        demo=repo.demo,
    )
