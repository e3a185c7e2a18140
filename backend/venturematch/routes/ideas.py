from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..schemas.idea_schema import (
    IdeaListResponse,
    IdeaResponse,
    IdeaSubmission,
    IdeaUpdate,
    IdeaValidationResponse,
    InterestRequest,
    MessageResponse,
)
from ..services import idea_service
from ..services.ai_evaluator import evaluate_with_ai
from ..services.auth_dependency import Actor, get_optional_actor, require_role
from ..services.idea_service import DuplicateInterest, IdeaNotFound, IdeaRejected, PermissionDenied
from ..services.idea_validator import validate_idea_input
from ..services.repositories import (
    IdeaRepository,
    NotificationRepository,
    get_idea_repository,
    get_notification_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ideas",
    tags=["Ideas"],
)

DEMO_MESSAGE = "Running in demo mode. Configure DATABASE_URL for full functionality."


def to_http_error(exc: Exception) -> HTTPException:
    """Translate an idea-service exception into the matching HTTP error."""
    if isinstance(exc, IdeaNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found")
    if isinstance(exc, PermissionDenied):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, IdeaRejected):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Idea did not pass the submission checks", "issues": exc.issues},
        )
    if isinstance(exc, DuplicateInterest):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post(
    "/validate",
    response_model=IdeaValidationResponse,
    summary="Check an idea against the submission gate",
)
def validate_submission(payload: IdeaSubmission) -> IdeaValidationResponse:
    """Dry run of the submission gate. Nothing is stored."""
    issues = validate_idea_input(payload.model_dump())
    return IdeaValidationResponse(valid=not issues, issues=issues)


@router.post(
    "/",
    response_model=IdeaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a Startup Idea",
    response_description="The stored idea with its score, breakdown and SWOT",
)
async def submit_idea(
    payload: IdeaSubmission,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Actor = Depends(require_role("entrepreneur")),
) -> IdeaResponse:
    """Validate, score and persist an idea. Rejected ideas get 422 with every issue."""
    issues = validate_idea_input(payload.model_dump())
    if issues:
        raise to_http_error(IdeaRejected(issues))

    external = await evaluate_with_ai(payload.model_dump())
    try:
        record = idea_service.submit_idea(repo, payload, actor, external=external)
    except IdeaRejected as exc:
        raise to_http_error(exc) from exc

    suffix = " (demo mode)" if repo.demo else ""
    return IdeaResponse(
        message=f"Idea created successfully{suffix}",
        idea=idea_service.to_idea_out(record),
        demo=repo.demo,
    )


@router.get(
    "/",
    response_model=IdeaListResponse,
    summary="Browse public ideas",
)
def list_ideas(
    category: Optional[str] = None,
    stage: Optional[str] = None,
    min_score: int = Query(0, ge=0, le=100),
    sort: Literal["score", "recent", "interests", "views"] = "score",
    search: Optional[str] = Query(None, max_length=200),
    featured: bool = False,
    repo: IdeaRepository = Depends(get_idea_repository),
) -> IdeaListResponse:
    ideas = idea_service.query_ideas(
        repo.list(),
        category=category,
        stage=stage,
        min_score=min_score,
        search=search,
        featured=featured,
        sort=sort,
    )
    return IdeaListResponse(
        ideas=[idea_service.to_idea_out(r) for r in ideas],
        demo=repo.demo,
        message=DEMO_MESSAGE if repo.demo else None,
    )


@router.get(
    "/mine",
    response_model=IdeaListResponse,
    summary="The caller's own ideas",
)
def my_ideas(
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Actor = Depends(require_role("entrepreneur")),
) -> IdeaListResponse:
    ideas = idea_service.ideas_of(repo, actor)
    return IdeaListResponse(ideas=[idea_service.to_idea_out(r) for r in ideas], demo=repo.demo)


@router.get(
    "/{idea_id}",
    response_model=IdeaResponse,
    summary="Get idea by ID",
)
def get_idea(
    idea_id: str,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Optional[Actor] = Depends(get_optional_actor),
) -> IdeaResponse:
    """Return one idea; investor views of other people's ideas are counted."""
    try:
        record = idea_service.get_idea(repo, idea_id, actor)
    except (IdeaNotFound, PermissionDenied) as exc:
        raise to_http_error(exc) from exc
    record = idea_service.record_view(repo, record, actor)
    return IdeaResponse(message="OK", idea=idea_service.to_idea_out(record), demo=repo.demo)


@router.put(
    "/{idea_id}",
    response_model=IdeaResponse,
    summary="Update an idea",
)
async def update_idea(
    idea_id: str,
    changes: IdeaUpdate,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Actor = Depends(require_role("entrepreneur")),
) -> IdeaResponse:
    external = None
    updates = changes.model_dump(exclude_unset=True)
    if idea_service.SCORED_FIELDS.intersection(updates):
        current = repo.get(idea_id)
        if current is not None and idea_service.is_owner(current, actor):
            external = await evaluate_with_ai({**current, **updates})
    try:
        record = idea_service.update_idea(repo, idea_id, changes, actor, external=external)
    except (IdeaNotFound, PermissionDenied, IdeaRejected) as exc:
        raise to_http_error(exc) from exc

    suffix = " (demo mode)" if repo.demo else ""
    return IdeaResponse(
        message=f"Idea updated successfully{suffix}",
        idea=idea_service.to_idea_out(record),
        demo=repo.demo,
    )


@router.delete(
    "/{idea_id}",
    response_model=MessageResponse,
    summary="Delete an idea",
)
def delete_idea(
    idea_id: str,
    repo: IdeaRepository = Depends(get_idea_repository),
    actor: Actor = Depends(require_role("entrepreneur")),
) -> MessageResponse:
    try:
        idea_service.delete_idea(repo, idea_id, actor)
    except (IdeaNotFound, PermissionDenied) as exc:
        raise to_http_error(exc) from exc
    suffix = " (demo mode)" if repo.demo else ""
    return MessageResponse(message=f"Idea deleted successfully{suffix}", demo=repo.demo)


@router.post(
    "/{idea_id}/interest",
    response_model=IdeaResponse,
    summary="Express investor interest",
)
def express_interest(
    idea_id: str,
    body: Optional[InterestRequest] = None,
    repo: IdeaRepository = Depends(get_idea_repository),
    notifications: NotificationRepository = Depends(get_notification_repository),
    actor: Actor = Depends(require_role("investor")),
) -> IdeaResponse:
    """Record interest once per investor and notify the entrepreneur."""
    try:
        record = idea_service.express_interest(
            repo, notifications, idea_id, actor, body.message if body else ""
        )
    except (IdeaNotFound, PermissionDenied, DuplicateInterest) as exc:
        raise to_http_error(exc) from exc
    suffix = " (demo mode)" if repo.demo else ""
    return IdeaResponse(
        message=f"Interest expressed successfully{suffix}",
        idea=idea_service.to_idea_out(record),
        demo=repo.demo,
    )
