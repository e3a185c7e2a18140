import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Idea(Base):
    __tablename__ = "ideas"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    tagline = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    stage = Column(String, nullable=False)

    # Author: token claims are copied at submission time (no users table)
    entrepreneur_id = Column(String, nullable=False, index=True)
    entrepreneur_name = Column(String, nullable=True)
    entrepreneur_email = Column(String, nullable=True)
    entrepreneur_avatar = Column(String, nullable=True)

    # Problem & Solution
    problem_statement = Column(Text, nullable=False, default="")
    proposed_solution = Column(Text, nullable=False, default="")
    uniqueness = Column(Text, nullable=False, default="")
    target_audience = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    # Market & Validation
    market_size = Column(String, nullable=True)
    competitors = Column(Text, nullable=True)
    customer_validation = Column(Text, nullable=True)

    # Product & Execution
    business_model = Column(String, nullable=True)
    team_background = Column(Text, nullable=True)
    pitch_deck_url = Column(String, nullable=True)
    demo_url = Column(String, nullable=True)
    current_progress = Column(String, nullable=True)

    visibility = Column(String, nullable=False, default="public")
    status = Column(String, nullable=False, default="pending")
    featured = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)

    # Scoring: JSON payloads stored as text, NULL means "not evaluated yet"
    ai_score = Column(Integer, nullable=False, default=0)
    score_source = Column(String, nullable=True)
    ml_suggestions_json = Column(Text, nullable=True)
    evaluation_json = Column(Text, nullable=True)
    swot_json = Column(Text, nullable=True)
    score_history_json = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    interests = relationship(
        "Interest",
        back_populates="idea",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Interest.created_at",
    )


class Interest(Base):
    __tablename__ = "idea_interests"
    __table_args__ = (UniqueConstraint("idea_id", "investor_id", name="uq_interest_idea_investor"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    idea_id = Column(String(36), ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False, index=True)
    investor_id = Column(String, nullable=False)
    investor_name = Column(String, nullable=True)
    message = Column(Text, nullable=True, default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    idea = relationship("Idea", back_populates="interests")
