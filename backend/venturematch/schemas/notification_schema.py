from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class NotificationOut(BaseModel):
    id: str
    type: str
    title: str
    message: str
    idea_id: Optional[str] = None
    related_user_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    action_required: bool = False
    read: bool = False
    created_at: Optional[str] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationOut]
    unread_count: int
    demo: bool = False
