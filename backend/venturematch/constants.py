"""Centralized constants shared across the scoring engine and routes.

This module is the SINGLE SOURCE OF TRUTH for the published scoring tables
(weights, stage feasibility, stop words) and the closed value sets enforced
at the persistence layer. Reused by:
  - Idea Validator / Evaluator / SWOT Generator / Similarity Engine
  - Idea submission schemas
"""

from __future__ import annotations

# ── Closed value sets (persistence layer) ───────────────────────────────
# The evaluator treats these fields as free text; only submissions are
# checked against these lists.

IDEA_CATEGORIES: list[str] = [
    "AI/ML",
    "EdTech",
    "FinTech",
    "HealthTech",
    "GreenTech",
    "IoT",
    "SaaS",
    "Consumer",
    "Gaming",
    "E-commerce",
    "Blockchain",
    "Other",
]

IDEA_STAGES: list[str] = ["Idea", "Prototype", "Early Customers", "Growth", "Scaling"]

# Progress slugs; also literal keys of STAGE_FEASIBILITY
CURRENT_PROGRESS: list[str] = ["idea", "prototype", "mvp", "early-users", "revenue"]

TARGET_AUDIENCES: list[str] = ["Individuals", "SMBs", "Enterprises", "Niche Groups"]

MARKET_SIZES: list[str] = ["Small (< $1B)", "Medium ($1B - $10B)", "Large (> $10B)"]

BUSINESS_MODELS: list[str] = [
    "Subscription",
    "Freemium",
    "One-time Purchase",
    "Marketplace",
    "Advertising",
    "Commission",
    "Licensing",
    "Other",
]

IDEA_VISIBILITIES: list[str] = ["public", "private"]

# Statuses shown in the public investor listing
LISTED_STATUSES: frozenset[str] = frozenset({"pending", "under_review", "active", "featured"})

USER_ROLES: list[str] = ["entrepreneur", "investor", "admin"]

# ── Keyword extraction ──────────────────────────────────────────────────
# "her" appears twice in the published list; a set keeps one.
STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "being", "have",
    "has", "had", "will", "would", "could", "should", "may", "might", "can",
    "this", "that", "these", "those", "i", "you", "he", "she", "it", "we",
    "they", "me", "him", "her", "us", "them", "my", "your", "his", "its",
    "our", "their", "am", "do", "does", "did", "get", "go", "make", "take",
    "come", "see",
})

SIMILARITY_KEYWORD_LIMIT: int = 20
SWOT_KEYWORD_LIMIT: int = 30

# ── Evaluator ───────────────────────────────────────────────────────────
# Weights sum to 1.0
EVALUATION_WEIGHTS: dict[str, float] = {
    "completeness": 0.15,
    "clarity": 0.15,
    "differentiation": 0.15,
    "market_potential": 0.10,
    "traction": 0.15,
    "feasibility": 0.15,
    "business_model": 0.05,
    "professionalism": 0.10,
}

# Human-readable stage labels and machine-style progress slugs are both
# literal keys; lookups try the raw value first, then its lowercase form.
STAGE_FEASIBILITY: dict[str, float] = {
    "Idea": 0.3,
    "Prototype": 0.6,
    "MVP Ready": 0.7,
    "Early Customers": 0.8,
    "Growth": 0.9,
    "Scaling": 1.0,
    "early-users": 0.75,
    "prototype": 0.6,
    "mvp": 0.7,
    "revenue": 0.9,
}
DEFAULT_STAGE_FEASIBILITY: float = 0.4
DEMO_URL_FEASIBILITY_BONUS: float = 0.1

# ── Similarity engine ───────────────────────────────────────────────────
SIMILARITY_WEIGHTS: dict[str, float] = {
    "category": 0.40,
    "keywords": 0.30,
    "target_audience": 0.15,
    "stage": 0.10,
    "business_model": 0.05,
}
SIMILARITY_THRESHOLD: float = 0.1
SIMILAR_KEYWORD_REASON_THRESHOLD: float = 0.1
DEFAULT_SIMILAR_RESULTS: int = 6

# ── External AI review ──────────────────────────────────────────────────
AI_REVIEW_BREAKDOWN_KEYS: frozenset[str] = frozenset({
    "problem",
    "solution",
    "uniqueness",
    "market",
    "team",
    "viability",
})

AVATAR_URL_TEMPLATE: str = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
