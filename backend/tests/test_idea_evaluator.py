"""Idea evaluator tests: subscores, composite score, warnings, determinism."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from venturematch.constants import EVALUATION_WEIGHTS
from venturematch.services.idea_evaluator import (
    WARNING_CLARITY,
    WARNING_COMPLETENESS,
    WARNING_DIFFERENTIATION,
    WARNING_TRACTION,
    clarity_score,
    evaluate_idea,
    feasibility_score,
    length_quality,
    market_potential_score,
    professionalism_score,
    traction_score,
)

STRONG_IDEA = {
    "title": "Clinic scheduling assistant for rural practices",
    "tagline": "Fewer missed appointments through timely reminders and smart rebooking",
    "problem_statement": (
        "Rural clinics lose a fifth of their appointments to patients who never show up. "
        "Each empty slot costs the practice money and delays care for someone else."
    ),
    "proposed_solution": (
        "Our assistant sends reminders by text message and offers open slots to a waiting list. "
        "Staff approve every change from one simple screen at the front desk."
    ),
    "uniqueness": (
        "We integrate with the three practice systems used by most rural clinics and need "
        "no new hardware or staff training."
    ),
    "stage": "Scaling",
    "demo_url": "https://demo.clinicflow.example.com",
    "customer_validation": "50 paying users, $10k MRR",
    "market_size": "Large (> $10B)",
    "business_model": "Subscription",
}


class TestSubscores:
    def test_length_quality_buckets(self):
        assert length_quality("", 20, 80) == 0.0
        assert length_quality("   ", 20, 80) == 0.0
        assert length_quality("short", 20, 80) == 0.2
        assert length_quality("x" * 20, 20, 80) == 0.7
        assert length_quality("x" * 80, 20, 80) == 1.0

    def test_clarity_buckets(self):
        short = "Too short here."
        ideal = "This sentence has exactly ten words in it for testing."
        assert clarity_score(short, short) == 0.5
        assert clarity_score(ideal, ideal) == 1.0
        assert clarity_score("", "") == 0.0

    def test_clarity_ignores_empty_side(self):
        ideal = "This sentence has exactly ten words in it for testing."
        assert clarity_score(ideal, "") == 1.0

    def test_clarity_spam_penalty(self):
        spam = "This sentence is sooooo long that it has eleven words total."
        assert clarity_score(spam, "") == pytest.approx(0.8)

    def test_clarity_long_sentences(self):
        thirty = " ".join(["word"] * 30) + "."
        fifty = " ".join(["word"] * 50) + "."
        assert clarity_score(thirty, "") == 0.7
        assert clarity_score(fifty, "") == 0.4

    def test_market_potential(self):
        assert market_potential_score("Large (> $10B)") == 1.0
        assert market_potential_score(">$10B") == 1.0
        assert market_potential_score("Medium ($1B - $10B)") == 0.7
        assert market_potential_score("Small (< $1B)") == 0.4
        assert market_potential_score("") == 0.2

    def test_traction(self):
        assert traction_score("") == 0.0
        assert traction_score("Pilot") == 0.3
        assert traction_score("3 pilots") == pytest.approx(0.6)
        assert traction_score("50 paying users, $10k MRR") == pytest.approx(1.0)
        assert traction_score("Talked to a lot of friends about it") == 0.4

    def test_feasibility_table(self):
        assert feasibility_score("Idea", "") == 0.3
        assert feasibility_score("Scaling", "") == 1.0
        assert feasibility_score("Scaling", "https://demo") == 1.0
        assert feasibility_score("Prototype", "https://demo") == pytest.approx(0.7)

    def test_feasibility_case_insensitive_fallback(self):
        assert feasibility_score("MVP", "") == 0.7
        assert feasibility_score("Early-Users", "") == 0.75
        assert feasibility_score("Revenue", "") == 0.9

    def test_feasibility_unknown_stage(self):
        assert feasibility_score("", "") == 0.4
        assert feasibility_score("Moonshot", "https://demo") == pytest.approx(0.5)

    def test_professionalism(self):
        assert professionalism_score(["Calm and clear text"], "A tagline") == 1.0
        assert professionalism_score(["BUY THIS NOW PLEASE"], "") == pytest.approx(0.9)
        assert professionalism_score(["fine"], "https://example.com") == pytest.approx(0.7)
        assert professionalism_score(["spaaaam"], "https://example.com") == pytest.approx(0.4)

    def test_professionalism_caps_penalty_is_capped(self):
        shouting = " ".join(["LOUD"] * 20)
        assert professionalism_score([shouting], "") == pytest.approx(0.6)


class TestEvaluateIdea:
    def test_strong_idea_scores_high(self):
        result = evaluate_idea(STRONG_IDEA)
        assert result.score >= 80
        assert result.breakdown.traction == pytest.approx(1.0)
        assert result.breakdown.feasibility == 1.0
        assert result.breakdown.completeness == 1.0
        assert result.warnings == []

    def test_score_matches_weighted_sum(self):
        result = evaluate_idea(STRONG_IDEA)
        values = result.breakdown.model_dump()
        weighted = sum(EVALUATION_WEIGHTS[k] * values[k] for k in EVALUATION_WEIGHTS)
        assert abs(result.score - weighted * 100) <= 0.5

    def test_empty_idea_scores_zero(self):
        result = evaluate_idea({})
        assert result.score == 0
        assert result.breakdown.completeness == 0.0
        assert result.warnings == [
            WARNING_COMPLETENESS,
            WARNING_CLARITY,
            WARNING_DIFFERENTIATION,
            WARNING_TRACTION,
        ]

    def test_none_and_non_text_fields(self):
        assert evaluate_idea(None).score == 0
        result = evaluate_idea({**STRONG_IDEA, "customer_validation": 42, "stage": None})
        assert result.breakdown.traction == 0.0
        assert result.breakdown.feasibility == pytest.approx(0.5)

    def test_progress_slug_stands_in_for_missing_stage(self):
        idea = {**STRONG_IDEA, "stage": "", "demo_url": "", "current_progress": "early-users"}
        assert evaluate_idea(idea).breakdown.feasibility == 0.75
        staged = {**idea, "stage": "Idea"}
        assert evaluate_idea(staged).breakdown.feasibility == 0.3

    def test_partial_idea_gets_completeness_warning(self):
        result = evaluate_idea({"title": "Just a title", "tagline": "And a tagline here"})
        assert result.breakdown.completeness == pytest.approx(0.4)
        assert WARNING_COMPLETENESS in result.warnings
        assert 0 < result.score < 50

    def test_business_model_bonus(self):
        with_model = evaluate_idea(STRONG_IDEA).breakdown.business_model
        without = evaluate_idea({**STRONG_IDEA, "business_model": ""}).breakdown.business_model
        assert with_model == 0.8
        assert without == 0.3

    def test_bounds_and_determinism(self):
        samples = [
            {},
            STRONG_IDEA,
            {"title": "AAAA BBBB CCCC DDDD EEEE FFFF GGGG HHHH IIII", "tagline": "https://x.io"},
            {"problem_statement": "zzzzzzzz " * 40, "stage": "Growth"},
        ]
        for idea in samples:
            first = evaluate_idea(idea)
            second = evaluate_idea(idea)
            assert first == second
            assert 0 <= first.score <= 100
            for value in first.breakdown.model_dump().values():
                assert 0.0 <= value <= 1.0

    def test_completeness_is_monotonic(self):
        idea = {}
        previous = evaluate_idea(idea).breakdown.completeness
        for key in ("title", "tagline", "problem_statement", "proposed_solution", "uniqueness"):
            idea = {**idea, key: STRONG_IDEA[key]}
            current = evaluate_idea(idea).breakdown.completeness
            assert current > previous
            previous = current
        assert previous == 1.0
