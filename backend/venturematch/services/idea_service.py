"""Idea workflows: submission gate, scoring, listing, interest and views.

Routes stay thin; every rule about who may do what to an idea lives here.
Services raise the small exceptions below and routes translate them into
HTTP errors.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from ..constants import LISTED_STATUSES
from ..schemas.idea_schema import AuthorOut, IdeaOut, IdeaSubmission, IdeaUpdate, InterestOut
from .ai_evaluator import resolve_score
from .auth_dependency import Actor
from .author import resolve_author
from .idea_evaluator import evaluate_idea
from .idea_validator import validate_idea_input
from .repositories import DuplicateInterest, IdeaRepository, NotificationRepository
from .swot_generator import generate_swot

logger = logging.getLogger(__name__)

# Changing any of these re-runs the scoring engine
SCORED_FIELDS = frozenset({
    "title",
    "tagline",
    "problem_statement",
    "proposed_solution",
    "uniqueness",
    "customer_validation",
})

# Fields the submission gate checks
GATED_FIELDS = ("title", "tagline", "problem_statement", "proposed_solution", "uniqueness")


class IdeaNotFound(Exception):
    pass


class PermissionDenied(Exception):
    pass


class IdeaRejected(Exception):
    """Submission failed the quality gate; ``issues`` lists every problem."""

    def __init__(self, issues: list[str]):
        super().__init__("; ".join(issues))
        self.issues = issues


# ===================================================================== #
#  Record helpers                                                         #
# ===================================================================== #

def author_id(record: Mapping[str, Any]) -> str:
    return resolve_author(record.get("entrepreneur")).id


def is_owner(record: Mapping[str, Any], actor: Optional[Actor]) -> bool:
    if actor is None:
        return False
    author = resolve_author(record.get("entrepreneur"))
    return author.id == actor.id or (bool(author.email) and author.email == actor.email)


def can_view(record: Mapping[str, Any], actor: Optional[Actor]) -> bool:
    if record.get("visibility") != "private":
        return True
    return actor is not None and (actor.role == "admin" or is_owner(record, actor))


def to_idea_out(record: Mapping[str, Any]) -> IdeaOut:
    """Convert a stored record into the API shape, resolving the author reference."""
    author = resolve_author(record.get("entrepreneur"))
    interests = record.get("interests") or []
    fields = {k: v for k, v in record.items() if k in IdeaOut.model_fields and v is not None}
    fields.pop("interests", None)
    fields.pop("author", None)
    # demo records may store an interest counter instead of a list
    if isinstance(interests, list):
        interest_list = [InterestOut(**i) for i in interests]
        interest_count = len(interests)
    else:
        interest_list = []
        interest_count = int(interests)
    return IdeaOut(
        **{**fields, "id": str(record.get("id"))},
        author=AuthorOut(id=author.id, name=author.name, avatar_url=author.avatar_url),
        interests=interest_list,
        interest_count=interest_count,
    )


def _score_fields(record: Mapping[str, Any], external: Optional[Mapping[str, Any]], reason: str) -> dict:
    """Engine outputs to merge into a record after (re)scoring."""
    resolved = resolve_score(record, external)
    local = evaluate_idea(record)
    history = list(record.get("score_history") or [])
    history.append({
        "score": resolved.score,
        "date": datetime.utcnow().isoformat(),
        "reason": "AI evaluation" if resolved.source == "ai" else reason,
    })
    return {
        "ai_score": resolved.score,
        "score_source": resolved.source,
        "ml_suggestions": resolved.suggestions,
        "evaluation": local.breakdown.model_dump(),
        "swot": generate_swot(record).model_dump(),
        "score_history": history,
    }


# ===================================================================== #
#  Workflows                                                              #
# ===================================================================== #

def submit_idea(
    repo: IdeaRepository,
    payload: IdeaSubmission,
    actor: Actor,
    external: Optional[Mapping[str, Any]] = None,
) -> dict:
    """Gate, score and persist a new idea for *actor*.

    Raises IdeaRejected with every gate issue when the idea is not
    submittable.
    """
    data = payload.model_dump()
    issues = validate_idea_input(data)
    if issues:
        logger.info("Rejected submission %r: %d issue(s)", data.get("title"), len(issues))
        raise IdeaRejected(issues)

    record = {
        **data,
        "entrepreneur": actor.as_author(),
        "status": "pending",
        "featured": False,
        "views": 0,
        "interests": [],
        "score_history": [],
    }
    record.update(_score_fields(record, external, "Heuristic evaluation"))
    stored = repo.add(record)
    print(f"[IDEAS] Stored idea {stored['id']} (score={stored['ai_score']}, source={stored['score_source']})")
    return stored


def get_idea(repo: IdeaRepository, idea_id: str, actor: Optional[Actor]) -> dict:
    record = repo.get(idea_id)
    if record is None:
        raise IdeaNotFound(idea_id)
    if not can_view(record, actor):
        raise PermissionDenied("Access denied")
    return record


def record_view(repo: IdeaRepository, record: dict, actor: Optional[Actor]) -> dict:
    """Count an investor opening someone else's idea."""
    if actor is None or actor.role != "investor" or is_owner(record, actor):
        return record
    updated = repo.increment_views(str(record["id"]))
    return updated or record


def _owned_record(repo: IdeaRepository, idea_id: str, actor: Actor, verb: str) -> dict:
    record = repo.get(idea_id)
    if record is None:
        raise IdeaNotFound(idea_id)
    if not is_owner(record, actor):
        raise PermissionDenied(f"Access denied. You can only {verb} your own ideas.")
    return record


def update_idea(
    repo: IdeaRepository,
    idea_id: str,
    changes: IdeaUpdate,
    actor: Actor,
    external: Optional[Mapping[str, Any]] = None,
) -> dict:
    """Merge *changes* into the owner's idea; re-score if narrative changed.

    The merged idea must still pass the submission gate.
    """
    record = _owned_record(repo, idea_id, actor, "edit")
    updates = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
    merged = {**record, **updates}

    if any(name in updates for name in GATED_FIELDS):
        issues = validate_idea_input(merged)
        if issues:
            raise IdeaRejected(issues)
    if SCORED_FIELDS.intersection(updates):
        updates.update(_score_fields(merged, external, "Heuristic re-evaluation"))
    elif updates:
        updates["swot"] = generate_swot(merged).model_dump()

    updated = repo.update(idea_id, updates)
    if updated is None:
        raise IdeaNotFound(idea_id)
    return updated


def delete_idea(repo: IdeaRepository, idea_id: str, actor: Actor) -> None:
    _owned_record(repo, idea_id, actor, "delete")
    repo.remove(idea_id)


def express_interest(
    repo: IdeaRepository,
    notifications: NotificationRepository,
    idea_id: str,
    actor: Actor,
    message: str = "",
) -> dict:
    """Record an investor's interest and notify the entrepreneur.

    Raises DuplicateInterest when this investor already expressed interest.
    """
    record = get_idea(repo, idea_id, actor)
    try:
        updated = repo.add_interest(
            idea_id,
            {
                "investor_id": actor.id,
                "investor_name": actor.name,
                "message": message,
                "created_at": datetime.utcnow().isoformat(),
            },
        )
    except DuplicateInterest as exc:
        raise DuplicateInterest("You have already expressed interest in this idea") from exc
    if updated is None:
        raise IdeaNotFound(idea_id)

    notifications.add({
        "recipient_id": author_id(record),
        "type": "interest",
        "title": "New investor interest in your idea",
        "message": f"{actor.name} expressed interest in your '{record.get('title', '')}' idea",
        "idea_id": str(record["id"]),
        "related_user_id": actor.id,
        "data": {"investor_name": actor.name, "investor_role": "Investor"},
        "action_required": True,
    })
    logger.info("Investor %s expressed interest in idea %s", actor.id, idea_id)
    return updated


def ideas_of(repo: IdeaRepository, actor: Actor) -> list[dict]:
    return [r for r in repo.list() if is_owner(r, actor)]


# ===================================================================== #
#  Listing                                                                #
# ===================================================================== #

def _interest_count(record: Mapping[str, Any]) -> int:
    interests = record.get("interests") or []
    return len(interests) if isinstance(interests, list) else int(interests)


def query_ideas(
    ideas: list[dict],
    *,
    category: Optional[str] = None,
    stage: Optional[str] = None,
    min_score: int = 0,
    search: Optional[str] = None,
    featured: bool = False,
    sort: str = "score",
) -> list[dict]:
    """Public investor listing: filter, then sort.

    ``"All"`` or empty for category/stage means no filter. Sort keys:
    ``score`` (default, ties broken by recency), ``recent``, ``interests``,
    ``views``.
    """
    result = [
        r for r in ideas
        if r.get("visibility", "public") == "public" and r.get("status", "pending") in LISTED_STATUSES
    ]
    if category and category != "All":
        result = [r for r in result if r.get("category") == category]
    if stage and stage != "All":
        result = [r for r in result if r.get("stage") == stage]
    if min_score:
        result = [r for r in result if int(r.get("ai_score") or 0) >= min_score]
    if featured:
        result = [r for r in result if r.get("featured")]
    if search:
        term = search.lower()
        result = [
            r for r in result
            if any(
                term in (r.get(k) or "").lower()
                for k in ("title", "tagline", "problem_statement", "description")
            )
        ]

    if sort == "recent":
        result.sort(key=lambda r: r.get("created_at") or "", reverse=True)
    elif sort == "interests":
        result.sort(key=_interest_count, reverse=True)
    elif sort == "views":
        result.sort(key=lambda r: int(r.get("views") or 0), reverse=True)
    else:
        result.sort(key=lambda r: (int(r.get("ai_score") or 0), r.get("created_at") or ""), reverse=True)
    return result
