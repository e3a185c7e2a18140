from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..constants import (
    BUSINESS_MODELS,
    CURRENT_PROGRESS,
    IDEA_CATEGORIES,
    IDEA_STAGES,
    IDEA_VISIBILITIES,
    MARKET_SIZES,
    TARGET_AUDIENCES,
)

_CLOSED_SETS: dict[str, list[str]] = {
    "category": IDEA_CATEGORIES,
    "stage": IDEA_STAGES,
    "target_audience": TARGET_AUDIENCES,
    "market_size": MARKET_SIZES,
    "business_model": BUSINESS_MODELS,
    "visibility": IDEA_VISIBILITIES,
    "current_progress": CURRENT_PROGRESS,
}


def _check_closed_set(name: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    allowed = _CLOSED_SETS[name]
    if value not in allowed:
        raise ValueError(f"{name} must be one of: {', '.join(allowed)}")
    return value


class IdeaSubmission(BaseModel):
    """Startup idea intake.

    Narrative fields default to empty so that quality problems are reported
    by the submission gate (as a list of issues) rather than as pydantic
    errors. Enum-like fields are checked against the closed sets in
    ``constants``.
    """

    # SECTION 1: Core Idea
    title: str = Field("", max_length=200)
    tagline: str = Field("", max_length=300)
    category: str
    stage: str

    # SECTION 2: Problem & Solution
    problem_statement: str = Field("", max_length=5000)
    proposed_solution: str = Field("", max_length=5000)
    uniqueness: str = Field("", max_length=5000)
    target_audience: str
    description: Optional[str] = Field(None, max_length=5000)

    # SECTION 3: Market & Validation
    market_size: str
    competitors: Optional[str] = Field(None, max_length=2000)
    customer_validation: str = Field("", max_length=5000)

    # SECTION 4: Product & Execution
    business_model: str
    team_background: Optional[str] = Field(None, max_length=5000)
    pitch_deck_url: Optional[str] = Field(None, max_length=500)
    demo_url: Optional[str] = Field(None, max_length=500)
    current_progress: Optional[str] = None

    visibility: str = "public"

    @field_validator(
        "category",
        "stage",
        "target_audience",
        "market_size",
        "business_model",
        "visibility",
        "current_progress",
    )
    @classmethod
    def in_closed_set(cls, v: str, info) -> str:
        return _check_closed_set(info.field_name, v)


class IdeaUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = Field(None, max_length=200)
    tagline: Optional[str] = Field(None, max_length=300)
    category: Optional[str] = None
    stage: Optional[str] = None
    problem_statement: Optional[str] = Field(None, max_length=5000)
    proposed_solution: Optional[str] = Field(None, max_length=5000)
    uniqueness: Optional[str] = Field(None, max_length=5000)
    target_audience: Optional[str] = None
    description: Optional[str] = Field(None, max_length=5000)
    market_size: Optional[str] = None
    competitors: Optional[str] = Field(None, max_length=2000)
    customer_validation: Optional[str] = Field(None, max_length=5000)
    business_model: Optional[str] = None
    team_background: Optional[str] = Field(None, max_length=5000)
    pitch_deck_url: Optional[str] = Field(None, max_length=500)
    demo_url: Optional[str] = Field(None, max_length=500)
    current_progress: Optional[str] = None
    visibility: Optional[str] = None

    @field_validator(
        "category",
        "stage",
        "target_audience",
        "market_size",
        "business_model",
        "visibility",
        "current_progress",
    )
    @classmethod
    def in_closed_set(cls, v: Optional[str], info) -> Optional[str]:
        return _check_closed_set(info.field_name, v)


class AuthorOut(BaseModel):
    id: str
    name: str
    avatar_url: str


class InterestOut(BaseModel):
    investor_id: str
    investor_name: Optional[str] = None
    message: str = ""
    created_at: Optional[str] = None


class IdeaOut(BaseModel):
    """Idea as rendered by the listing and detail pages."""

    id: str
    title: str = ""
    tagline: str = ""
    category: str = ""
    stage: str = ""
    problem_statement: str = ""
    proposed_solution: str = ""
    uniqueness: str = ""
    target_audience: Optional[str] = None
    description: Optional[str] = None
    market_size: Optional[str] = None
    competitors: Optional[str] = None
    customer_validation: Optional[str] = None
    business_model: Optional[str] = None
    team_background: Optional[str] = None
    pitch_deck_url: Optional[str] = None
    demo_url: Optional[str] = None
    current_progress: Optional[str] = None
    visibility: str = "public"
    status: str = "pending"
    featured: bool = False
    views: int = 0
    ai_score: int = 0
    score_source: Optional[str] = None
    ml_suggestions: List[str] = Field(default_factory=list)
    evaluation: Optional[Dict[str, float]] = None
    swot: Optional[Dict[str, List[str]]] = None
    score_history: List[Dict[str, Any]] = Field(default_factory=list)
    author: AuthorOut
    interests: List[InterestOut] = Field(default_factory=list)
    interest_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class IdeaListResponse(BaseModel):
    ideas: List[IdeaOut]
    demo: bool = False
    message: Optional[str] = None


class IdeaResponse(BaseModel):
    """Response returned after creating, reading or updating an idea."""

    message: str
    idea: IdeaOut
    demo: bool = False


class IdeaValidationResponse(BaseModel):
    valid: bool
    issues: List[str]


class InterestRequest(BaseModel):
    message: str = Field("", max_length=1000)


class MessageResponse(BaseModel):
    message: str
    demo: bool = False
