"""Rule-based SWOT generator.

Each bullet has its own independent trigger (length check, regex, or
keyword lexicon match); bullets appear in trigger order. Nothing is scored
or weighted here. A quadrant with no fired trigger gets one fixed
fallback sentence.
"""

from __future__ import annotations

import re
from typing import Any

from ..constants import SWOT_KEYWORD_LIMIT
from ..schemas.evaluation_schema import SWOTAnalysis
from .text_features import extract_keywords, field

MAX_QUOTE_LENGTH = 120

# ── Keyword lexicons (matched against the joined keyword text) ──────────
_AI_RE = re.compile(r"AI|machine learning|ml|automation", re.IGNORECASE)
_SUSTAINABILITY_RE = re.compile(r"sustainab|green|climate|energy", re.IGNORECASE)
_HEALTH_RE = re.compile(r"health|medic|therapy|mental", re.IGNORECASE)
_EDUCATION_RE = re.compile(r"education|edtech|learning", re.IGNORECASE)
_AI_RISK_RE = re.compile(r"ai|ml", re.IGNORECASE)

# ── Field triggers ──────────────────────────────────────────────────────
_LARGE_MARKET_RE = re.compile(r"Large|>\s*\$?10B", re.IGNORECASE)
_EARLY_STAGE_RE = re.compile(r"Idea|Prototype", re.IGNORECASE)
_REGULATED_FINANCE_RE = re.compile(r"fintech|payments|bank|lending|insurance", re.IGNORECASE)
_HEALTH_CATEGORY_RE = re.compile(r"health", re.IGNORECASE)
_MARKETPLACE_RE = re.compile(r"marketplace", re.IGNORECASE)

FALLBACK_STRENGTH = "Compelling narrative and potential for differentiation"
FALLBACK_WEAKNESS = "Key risks not fully articulated"
FALLBACK_OPPORTUNITY = "Emerging market dynamics to leverage"
FALLBACK_THREAT = "Execution and external risks to monitor"


def _quote(text: str, limit: int = MAX_QUOTE_LENGTH) -> str:
    return text[:limit] + ("…" if len(text) > limit else "")


def generate_swot(idea: Any) -> SWOTAnalysis:
    """Derive strengths, weaknesses, opportunities and threats for *idea*."""
    problem = field(idea, "problem_statement")
    solution = field(idea, "proposed_solution")
    uniqueness = field(idea, "uniqueness")
    market_size = field(idea, "market_size")
    competitors = field(idea, "competitors")
    validation = field(idea, "customer_validation")
    stage = field(idea, "stage")
    category = field(idea, "category")
    audience = field(idea, "target_audience")
    business_model = field(idea, "business_model")
    demo_url = field(idea, "demo_url")

    keywords: list[str] = []
    for key in ("title", "tagline", "problem_statement", "proposed_solution", "uniqueness"):
        keywords.extend(extract_keywords(field(idea, key), limit=SWOT_KEYWORD_LIMIT))
    keyword_text = " ".join(keywords)

    strengths: list[str] = []
    if len(uniqueness) > 30:
        strengths.append(f"Clear differentiation: {_quote(uniqueness)}")
    if len(problem) > 80 and len(solution) > 80:
        strengths.append("Strong problem-solution articulation with tangible context")
    if _LARGE_MARKET_RE.search(market_size):
        strengths.append("Large market potential with room for scale")
    if len(validation) > 20:
        strengths.append("Early customer validation provides confidence")
    if demo_url:
        strengths.append("Prototype/demo available for investor evaluation")
    if business_model:
        strengths.append(f"Defined business model: {business_model}")
    if audience:
        strengths.append(f"Well-defined target audience: {audience}")

    weaknesses: list[str] = []
    if not validation:
        weaknesses.append("Limited customer validation provided")
    if not demo_url and _EARLY_STAGE_RE.search(stage):
        weaknesses.append("Early stage without demo link may slow investor confidence")
    if len(uniqueness) < 20:
        weaknesses.append("Differentiation from competitors not strongly articulated")
    if not business_model:
        weaknesses.append("Business model not specified")

    opportunities: list[str] = []
    if category:
        opportunities.append(f"Growing opportunity in {category}")
    if _AI_RE.search(keyword_text):
        opportunities.append("Tailwinds from rapid AI ecosystem growth")
    if _SUSTAINABILITY_RE.search(keyword_text):
        opportunities.append("ESG and sustainability investment interest")
    if _HEALTH_RE.search(keyword_text):
        opportunities.append("Rising demand for digital health solutions")
    if _EDUCATION_RE.search(keyword_text):
        opportunities.append("Increased appetite for modern education platforms")
    if audience == "Enterprises":
        opportunities.append("Potential for high contract ACVs in enterprise segment")

    threats: list[str] = []
    if len(competitors) > 10:
        threats.append("Competitive landscape exists; need clear moat")
    if _REGULATED_FINANCE_RE.search(category):
        threats.append("Regulatory and compliance hurdles in FinTech")
    if _HEALTH_CATEGORY_RE.search(category):
        threats.append("Clinical validation and regulatory approvals may be required")
    if _AI_RISK_RE.search(keyword_text):
        threats.append("Data privacy, bias, and model drift risks in AI systems")
    if _MARKETPLACE_RE.search(business_model):
        threats.append("Chicken-and-egg dynamics for marketplace liquidity")

    return SWOTAnalysis(
        strengths=strengths or [FALLBACK_STRENGTH],
        weaknesses=weaknesses or [FALLBACK_WEAKNESS],
        opportunities=opportunities or [FALLBACK_OPPORTUNITY],
        threats=threats or [FALLBACK_THREAT],
    )
