# Schemas package
from .idea_schema import (
    IdeaListResponse,
    IdeaOut,
    IdeaResponse,
    IdeaSubmission,
    IdeaUpdate,
    IdeaValidationResponse,
    InterestRequest,
    MessageResponse,
)
from .evaluation_schema import (
    EvaluationBreakdown,
    EvaluationResult,
    IdeaReviewResponse,
    IdeaScore,
    SimilarIdeaOut,
    SimilarityScore,
    SWOTAnalysis,
)
from .notification_schema import NotificationListResponse, NotificationOut

__all__ = [
    "IdeaSubmission",
    "IdeaUpdate",
    "IdeaOut",
    "IdeaResponse",
    "IdeaListResponse",
    "IdeaValidationResponse",
    "InterestRequest",
    "MessageResponse",
    "EvaluationBreakdown",
    "EvaluationResult",
    "SWOTAnalysis",
    "SimilarityScore",
    "IdeaScore",
    "SimilarIdeaOut",
    "IdeaReviewResponse",
    "NotificationOut",
    "NotificationListResponse",
]
