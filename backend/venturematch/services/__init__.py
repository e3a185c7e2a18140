from .idea_validator import validate_idea_input
from .idea_evaluator import evaluate_idea
from .swot_generator import generate_swot
from .similarity_engine import find_similar_ideas, jaccard_similarity, similarity_label
from .ai_evaluator import evaluate_with_ai, resolve_score
from .author import resolve_author

__all__ = [
    "validate_idea_input",
    "evaluate_idea",
    "generate_swot",
    "find_similar_ideas",
    "jaccard_similarity",
    "similarity_label",
    "evaluate_with_ai",
    "resolve_score",
    "resolve_author",
]
