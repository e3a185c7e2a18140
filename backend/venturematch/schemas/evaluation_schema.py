from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from .idea_schema import IdeaOut


class EvaluationBreakdown(BaseModel):
    """Eight normalized quality dimensions produced by the Idea Evaluator.

    Every field is a float in [0, 1]. Weights live in
    ``constants.EVALUATION_WEIGHTS``.
    """

    completeness: float = Field(..., ge=0.0, le=1.0, description="Share of the five narrative fields filled in")
    clarity: float = Field(..., ge=0.0, le=1.0, description="Average sentence length bucket, minus spam penalty")
    differentiation: float = Field(..., ge=0.0, le=1.0, description="Length bucket of the uniqueness narrative")
    market_potential: float = Field(..., ge=0.0, le=1.0, description="Market size bucket")
    traction: float = Field(..., ge=0.0, le=1.0, description="Customer validation signals")
    feasibility: float = Field(..., ge=0.0, le=1.0, description="Stage lookup plus demo bonus")
    business_model: float = Field(..., ge=0.0, le=1.0, description="0.8 when a model is given, else 0.3")
    professionalism: float = Field(..., ge=0.0, le=1.0, description="1.0 minus shouting/link/spam penalties")


class EvaluationResult(BaseModel):
    """Composite 0-100 score, its breakdown, and improvement warnings."""

    score: int = Field(..., ge=0, le=100)
    breakdown: EvaluationBreakdown
    warnings: List[str] = Field(default_factory=list)


class SWOTAnalysis(BaseModel):
    """Four-quadrant narrative; every quadrant holds at least one bullet."""

    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]


class SimilarityScore(BaseModel):
    """One ranked candidate returned by the Similarity Engine."""

    idea_id: str
    score: float = Field(..., ge=0.0)
    similarities: List[str] = Field(default_factory=list)
    idea: Any = None


class IdeaScore(BaseModel):
    """Score actually shown for an idea.

    ``source`` is ``"ai"`` when a well-formed external review was available,
    ``"heuristic"`` when the local evaluator produced it.
    """

    score: int = Field(..., ge=0, le=100)
    source: Literal["ai", "heuristic"]
    breakdown: Dict[str, float] = Field(default_factory=dict)
    suggestions: List[str] = Field(default_factory=list)


class SimilarIdeaOut(BaseModel):
    idea_id: str
    score: float
    label: str
    similarities: List[str]
    idea: IdeaOut


class IdeaReviewResponse(BaseModel):
    """Everything the idea result page renders in one payload."""

    idea_id: str
    evaluation: EvaluationResult
    resolved: IdeaScore
    suggestions: List[str]
    swot: SWOTAnalysis
    similar_ideas: List[SimilarIdeaOut]
    demo: bool = False
