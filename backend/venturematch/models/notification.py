import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text

from ..database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    recipient_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)  # "interest" | "system"
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    idea_id = Column(String(36), nullable=True)
    related_user_id = Column(String, nullable=True)
    data_json = Column(Text, nullable=True)
    action_required = Column(Boolean, default=False, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
