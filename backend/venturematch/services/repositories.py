"""Idea and notification repositories.

Two interchangeable implementations per store:
  - In-memory (demo mode, no ``DATABASE_URL``): one instance per app,
    attached to ``app.state`` and injected through FastAPI dependencies
  - SQLAlchemy: one instance per request session

Both speak plain dict records so the scoring engine and the routes never
see ORM rows.
"""

from __future__ import annotations

import copy
import json
import threading
import uuid
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from fastapi import Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.idea import Idea, Interest
from ..models.notification import Notification

IDEA_TEXT_COLUMNS = (
    "title",
    "tagline",
    "category",
    "stage",
    "problem_statement",
    "proposed_solution",
    "uniqueness",
    "target_audience",
    "description",
    "market_size",
    "competitors",
    "customer_validation",
    "business_model",
    "team_background",
    "pitch_deck_url",
    "demo_url",
    "current_progress",
    "visibility",
    "status",
)
IDEA_SCALAR_COLUMNS = ("featured", "views", "ai_score", "score_source")
IDEA_JSON_COLUMNS = {
    "ml_suggestions": "ml_suggestions_json",
    "evaluation": "evaluation_json",
    "swot": "swot_json",
    "score_history": "score_history_json",
}


def _now() -> str:
    return datetime.utcnow().isoformat()


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class DuplicateInterest(Exception):
    """The investor already expressed interest in this idea."""


def _loads(raw: Optional[str], default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        return default


class IdeaRepository(Protocol):
    demo: bool

    def list(self) -> list[dict]: ...

    def get(self, idea_id: str) -> Optional[dict]: ...

    def add(self, record: dict) -> dict: ...

    def update(self, idea_id: str, changes: dict) -> Optional[dict]: ...

    def remove(self, idea_id: str) -> bool: ...

    def add_interest(self, idea_id: str, interest: dict) -> Optional[dict]: ...

    def increment_views(self, idea_id: str) -> Optional[dict]: ...


class NotificationRepository(Protocol):
    demo: bool

    def list_for(self, recipient_id: str) -> list[dict]: ...

    def add(self, record: dict) -> dict: ...

    def mark_read(self, notification_id: str, recipient_id: str) -> Optional[dict]: ...

    def mark_all_read(self, recipient_id: str) -> int: ...


# ===================================================================== #
#  In-memory (demo mode)                                                  #
# ===================================================================== #

class InMemoryIdeaRepository:
    """Mutable idea list standing in for a database; newest first."""

    demo = True

    def __init__(self, seed: Iterable[dict] = ()):
        self._ideas: list[dict] = [copy.deepcopy(r) for r in seed]
        self._lock = threading.Lock()

    def _index(self, idea_id: str) -> int:
        for i, record in enumerate(self._ideas):
            if str(record.get("id")) == str(idea_id):
                return i
        return -1

    def list(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._ideas)

    def get(self, idea_id: str) -> Optional[dict]:
        with self._lock:
            i = self._index(idea_id)
            return copy.deepcopy(self._ideas[i]) if i >= 0 else None

    def add(self, record: dict) -> dict:
        stored = copy.deepcopy(record)
        stored.setdefault("id", uuid.uuid4().hex)
        stored.setdefault("created_at", _now())
        stored.setdefault("interests", [])
        with self._lock:
            self._ideas.insert(0, stored)
        return copy.deepcopy(stored)

    def update(self, idea_id: str, changes: dict) -> Optional[dict]:
        with self._lock:
            i = self._index(idea_id)
            if i < 0:
                return None
            self._ideas[i] = {**self._ideas[i], **copy.deepcopy(changes), "updated_at": _now()}
            return copy.deepcopy(self._ideas[i])

    def remove(self, idea_id: str) -> bool:
        with self._lock:
            i = self._index(idea_id)
            if i < 0:
                return False
            del self._ideas[i]
            return True

    def add_interest(self, idea_id: str, interest: dict) -> Optional[dict]:
        investor_id = str(interest["investor_id"])
        with self._lock:
            i = self._index(idea_id)
            if i < 0:
                return None
            record = self._ideas[i]
            interests = list(record.get("interests") or [])
            if any(str(existing.get("investor_id")) == investor_id for existing in interests):
                raise DuplicateInterest(investor_id)
            record["interests"] = interests + [copy.deepcopy(interest)]
            return copy.deepcopy(record)

    def increment_views(self, idea_id: str) -> Optional[dict]:
        with self._lock:
            i = self._index(idea_id)
            if i < 0:
                return None
            record = self._ideas[i]
            record["views"] = int(record.get("views") or 0) + 1
            return copy.deepcopy(record)


class InMemoryNotificationRepository:
    demo = True

    def __init__(self, seed: Iterable[dict] = ()):
        self._items: list[dict] = [copy.deepcopy(r) for r in seed]
        self._lock = threading.Lock()

    def list_for(self, recipient_id: str) -> list[dict]:
        with self._lock:
            return [copy.deepcopy(n) for n in self._items if n.get("recipient_id") == recipient_id]

    def add(self, record: dict) -> dict:
        stored = {"read": False, "action_required": False, "data": {}, **copy.deepcopy(record)}
        stored.setdefault("id", uuid.uuid4().hex)
        stored.setdefault("created_at", _now())
        with self._lock:
            self._items.insert(0, stored)
        return copy.deepcopy(stored)

    def mark_read(self, notification_id: str, recipient_id: str) -> Optional[dict]:
        with self._lock:
            for item in self._items:
                if item.get("id") == notification_id and item.get("recipient_id") == recipient_id:
                    item["read"] = True
                    return copy.deepcopy(item)
        return None

    def mark_all_read(self, recipient_id: str) -> int:
        count = 0
        with self._lock:
            for item in self._items:
                if item.get("recipient_id") == recipient_id and not item.get("read"):
                    item["read"] = True
                    count += 1
        return count


# ===================================================================== #
#  SQLAlchemy                                                             #
# ===================================================================== #

def idea_row_to_record(row: Idea) -> dict:
    record: dict[str, Any] = {"id": row.id}
    for name in IDEA_TEXT_COLUMNS + IDEA_SCALAR_COLUMNS:
        record[name] = getattr(row, name)
    record["ml_suggestions"] = _loads(row.ml_suggestions_json, [])
    record["evaluation"] = _loads(row.evaluation_json, None)
    record["swot"] = _loads(row.swot_json, None)
    record["score_history"] = _loads(row.score_history_json, [])
    record["entrepreneur"] = {
        "id": row.entrepreneur_id,
        "name": row.entrepreneur_name,
        "email": row.entrepreneur_email,
        "avatar": row.entrepreneur_avatar,
    }
    record["interests"] = [
        {
            "investor_id": i.investor_id,
            "investor_name": i.investor_name,
            "message": i.message or "",
            "created_at": _iso(i.created_at),
        }
        for i in row.interests
    ]
    record["created_at"] = _iso(row.created_at)
    record["updated_at"] = _iso(row.updated_at)
    return record


def _apply_to_row(row: Idea, changes: dict) -> None:
    for name in IDEA_TEXT_COLUMNS + IDEA_SCALAR_COLUMNS:
        if name in changes:
            setattr(row, name, changes[name])
    for key, column in IDEA_JSON_COLUMNS.items():
        if key in changes:
            setattr(row, column, json.dumps(changes[key], default=str))
    author = changes.get("entrepreneur")
    if isinstance(author, dict):
        row.entrepreneur_id = str(author.get("id") or "")
        row.entrepreneur_name = author.get("name")
        row.entrepreneur_email = author.get("email")
        row.entrepreneur_avatar = author.get("avatar")


class SqlIdeaRepository:
    demo = False

    def __init__(self, db: Session):
        self.db = db

    def _row(self, idea_id: str) -> Optional[Idea]:
        return self.db.query(Idea).filter(Idea.id == str(idea_id)).first()

    def list(self) -> list[dict]:
        rows = self.db.query(Idea).order_by(Idea.created_at.desc()).all()
        return [idea_row_to_record(r) for r in rows]

    def get(self, idea_id: str) -> Optional[dict]:
        row = self._row(idea_id)
        return idea_row_to_record(row) if row else None

    def add(self, record: dict) -> dict:
        row = Idea()
        if record.get("id"):
            row.id = str(record["id"])
        _apply_to_row(row, record)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return idea_row_to_record(row)

    def update(self, idea_id: str, changes: dict) -> Optional[dict]:
        row = self._row(idea_id)
        if row is None:
            return None
        _apply_to_row(row, changes)
        self.db.commit()
        self.db.refresh(row)
        return idea_row_to_record(row)

    def remove(self, idea_id: str) -> bool:
        row = self._row(idea_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def add_interest(self, idea_id: str, interest: dict) -> Optional[dict]:
        investor_id = str(interest["investor_id"])
        row = self._row(idea_id)
        if row is None:
            return None
        if any(i.investor_id == investor_id for i in row.interests):
            raise DuplicateInterest(investor_id)
        row.interests.append(
            Interest(
                investor_id=investor_id,
                investor_name=interest.get("investor_name"),
                message=interest.get("message") or "",
            )
        )
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Another session stored the same (idea, investor) pair first
            self.db.rollback()
            raise DuplicateInterest(investor_id) from exc
        self.db.refresh(row)
        return idea_row_to_record(row)

    def increment_views(self, idea_id: str) -> Optional[dict]:
        count = (
            self.db.query(Idea)
            .filter(Idea.id == str(idea_id))
            .update({Idea.views: Idea.views + 1}, synchronize_session=False)
        )
        self.db.commit()
        if not count:
            return None
        return self.get(idea_id)


def notification_row_to_record(row: Notification) -> dict:
    return {
        "id": row.id,
        "recipient_id": row.recipient_id,
        "type": row.type,
        "title": row.title,
        "message": row.message,
        "idea_id": row.idea_id,
        "related_user_id": row.related_user_id,
        "data": _loads(row.data_json, {}),
        "action_required": row.action_required,
        "read": row.read,
        "created_at": _iso(row.created_at),
    }


class SqlNotificationRepository:
    demo = False

    def __init__(self, db: Session):
        self.db = db

    def _query(self, recipient_id: str):
        return self.db.query(Notification).filter(Notification.recipient_id == recipient_id)

    def list_for(self, recipient_id: str) -> list[dict]:
        rows = self._query(recipient_id).order_by(Notification.created_at.desc()).all()
        return [notification_row_to_record(r) for r in rows]

    def add(self, record: dict) -> dict:
        row = Notification(
            recipient_id=record["recipient_id"],
            type=record["type"],
            title=record["title"],
            message=record["message"],
            idea_id=record.get("idea_id"),
            related_user_id=record.get("related_user_id"),
            data_json=json.dumps(record.get("data") or {}),
            action_required=bool(record.get("action_required")),
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return notification_row_to_record(row)

    def mark_read(self, notification_id: str, recipient_id: str) -> Optional[dict]:
        row = self._query(recipient_id).filter(Notification.id == notification_id).first()
        if row is None:
            return None
        row.read = True
        self.db.commit()
        self.db.refresh(row)
        return notification_row_to_record(row)

    def mark_all_read(self, recipient_id: str) -> int:
        count = (
            self._query(recipient_id)
            .filter(Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        self.db.commit()
        return count


# ===================================================================== #
#  FastAPI dependencies                                                   #
# ===================================================================== #

def get_idea_repository(
    request: Request,
    db: Optional[Session] = Depends(get_db),
) -> IdeaRepository:
    if db is None:
        return request.app.state.demo_ideas
    return SqlIdeaRepository(db)


def get_notification_repository(
    request: Request,
    db: Optional[Session] = Depends(get_db),
) -> NotificationRepository:
    if db is None:
        return request.app.state.demo_notifications
    return SqlNotificationRepository(db)
