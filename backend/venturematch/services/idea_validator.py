"""Idea submission gate.

Checks the raw narrative fields of an idea against structural and
content-quality rules. Every violated rule is reported, in rule order;
an empty list means the idea may be submitted.
"""

from __future__ import annotations

from typing import Any

from .text_features import alpha_ratio, field, has_repeated_chars, is_gibberish, is_url_only

MIN_TITLE_ALPHA_RATIO = 0.4
MIN_TAGLINE_LENGTH = 10
MIN_PROBLEM_LENGTH = 40
MIN_SOLUTION_LENGTH = 40
MIN_UNIQUENESS_LENGTH = 20

ISSUE_TITLE_MISSING = "Provide a clear, descriptive title."
ISSUE_TITLE_SYMBOLS = "Title must contain meaningful words, not just symbols or links."
ISSUE_TAGLINE_SHORT = "Add a descriptive one-liner tagline (10+ chars)."
ISSUE_PROBLEM_SHORT = "Expand the problem statement (40+ chars)."
ISSUE_SOLUTION_SHORT = "Expand the proposed solution (40+ chars)."
ISSUE_UNIQUENESS_SHORT = "Describe what makes your solution unique (20+ chars)."
ISSUE_URL_ONLY = "Problem/Solution must describe context, not only a link."
ISSUE_GIBBERISH = "Remove placeholder or non-context content (e.g., lorem ipsum, test, 12345)."
ISSUE_REPEATED_CHARS = "Avoid long repeated characters or spam-like content."


def validate_idea_input(idea: Any) -> list[str]:
    """Return the list of human-readable issues blocking submission of *idea*."""
    title = field(idea, "title")
    tagline = field(idea, "tagline")
    problem = field(idea, "problem_statement")
    solution = field(idea, "proposed_solution")
    uniqueness = field(idea, "uniqueness")

    issues: list[str] = []

    if not title.strip():
        issues.append(ISSUE_TITLE_MISSING)
    if alpha_ratio(title) < MIN_TITLE_ALPHA_RATIO:
        issues.append(ISSUE_TITLE_SYMBOLS)
    if len(tagline.strip()) < MIN_TAGLINE_LENGTH:
        issues.append(ISSUE_TAGLINE_SHORT)
    if len(problem.strip()) < MIN_PROBLEM_LENGTH:
        issues.append(ISSUE_PROBLEM_SHORT)
    if len(solution.strip()) < MIN_SOLUTION_LENGTH:
        issues.append(ISSUE_SOLUTION_SHORT)
    if len(uniqueness.strip()) < MIN_UNIQUENESS_LENGTH:
        issues.append(ISSUE_UNIQUENESS_SHORT)

    if is_url_only(problem) or is_url_only(solution):
        issues.append(ISSUE_URL_ONLY)
    if any(is_gibberish(text) for text in (title, tagline, problem, solution)):
        issues.append(ISSUE_GIBBERISH)
    if has_repeated_chars(problem + solution):
        issues.append(ISSUE_REPEATED_CHARS)

    return issues
