"""Submission gate tests: required narrative fields and content-quality rules."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from venturematch.services.idea_validator import (
    ISSUE_GIBBERISH,
    ISSUE_PROBLEM_SHORT,
    ISSUE_REPEATED_CHARS,
    ISSUE_SOLUTION_SHORT,
    ISSUE_TAGLINE_SHORT,
    ISSUE_TITLE_MISSING,
    ISSUE_TITLE_SYMBOLS,
    ISSUE_UNIQUENESS_SHORT,
    ISSUE_URL_ONLY,
    validate_idea_input,
)

GOOD_IDEA = {
    "title": "Micro-lending for street vendors",
    "tagline": "Working capital loans approved from a phone",
    "problem_statement": "Street vendors cannot get small loans because banks see them as unscorable.",
    "proposed_solution": "We score vendors from mobile wallet history and lend within one hour.",
    "uniqueness": "Alternative credit scoring built on daily wallet cash flow.",
}


def _with(**changes):
    return {**GOOD_IDEA, **changes}


class TestValidIdea:
    def test_good_idea_passes(self):
        assert validate_idea_input(GOOD_IDEA) == []

    def test_accepts_attribute_objects(self):
        class Submission:
            pass

        obj = Submission()
        for key, value in GOOD_IDEA.items():
            setattr(obj, key, value)
        assert validate_idea_input(obj) == []


class TestRequiredFields:
    def test_all_empty_reports_every_required_rule(self):
        issues = validate_idea_input(
            {"title": "", "tagline": "", "problem_statement": "", "proposed_solution": "", "uniqueness": ""}
        )
        assert len(issues) >= 5
        assert issues == [
            ISSUE_TITLE_MISSING,
            ISSUE_TITLE_SYMBOLS,
            ISSUE_TAGLINE_SHORT,
            ISSUE_PROBLEM_SHORT,
            ISSUE_SOLUTION_SHORT,
            ISSUE_UNIQUENESS_SHORT,
        ]

    def test_missing_keys_behave_like_empty(self):
        assert len(validate_idea_input({})) == 6
        assert len(validate_idea_input(None)) == 6

    def test_non_text_values_are_empty(self):
        issues = validate_idea_input(_with(title=12345))
        assert ISSUE_TITLE_MISSING in issues

    def test_symbol_only_title(self):
        assert validate_idea_input(_with(title="$$$ ### !!!")) == [ISSUE_TITLE_SYMBOLS]

    def test_lengths_are_measured_after_trimming(self):
        issues = validate_idea_input(_with(tagline="   short    "))
        assert issues == [ISSUE_TAGLINE_SHORT]

    def test_boundaries(self):
        assert validate_idea_input(_with(tagline="x" * 9 + " ")) == [ISSUE_TAGLINE_SHORT]
        assert validate_idea_input(_with(tagline="abcdefghij")) == []
        assert validate_idea_input(_with(uniqueness="Unique because yes!!")) == []
        assert ISSUE_UNIQUENESS_SHORT in validate_idea_input(_with(uniqueness="Unique because yes!"))


class TestContentRules:
    def test_lorem_ipsum_problem_is_gibberish(self):
        issues = validate_idea_input(
            _with(problem_statement="Lorem ipsum dolor sit amet, consectetur adipiscing elit sed do.")
        )
        assert ISSUE_GIBBERISH in issues

    def test_placeholder_title_is_gibberish(self):
        assert validate_idea_input(_with(title="test")) == [ISSUE_GIBBERISH]

    def test_url_only_solution(self):
        issues = validate_idea_input(_with(proposed_solution="https://example.com/our-solution-page-v2"))
        assert ISSUE_URL_ONLY in issues

    def test_repeated_characters(self):
        issues = validate_idea_input(
            _with(problem_statement="Vendors are sooooo underserved by banks in every single city.")
        )
        assert issues == [ISSUE_REPEATED_CHARS]

    def test_issues_keep_rule_order(self):
        issues = validate_idea_input(
            _with(tagline="", proposed_solution="https://example.com", title="asdf")
        )
        assert issues == [ISSUE_TAGLINE_SHORT, ISSUE_SOLUTION_SHORT, ISSUE_URL_ONLY, ISSUE_GIBBERISH]

    def test_lorem_ipsum_title(self):
        issues = validate_idea_input({
            "title": "Lorem Ipsum Generator",
            "tagline": "A tool for generating lorem ipsum text blocks",
            "problem_statement": "x" * 50,
            "proposed_solution": "y" * 50,
            "uniqueness": "z" * 25,
        })
        assert ISSUE_GIBBERISH in issues
        assert ISSUE_REPEATED_CHARS in issues
