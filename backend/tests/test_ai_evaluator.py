"""AI review tests: well-formedness, score precedence, fallback to heuristics.

No real HTTP calls: the chat-completions endpoint is served by an
``httpx.MockTransport`` and the review helper is patched where needed.
"""

import asyncio
import json
import os
import sys
from unittest.mock import AsyncMock, patch

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import httpx
import pytest

from venturematch.services import openai_client
from venturematch.services.ai_evaluator import evaluate_with_ai, is_well_formed_review, resolve_score
from venturematch.services.idea_evaluator import evaluate_idea
from venturematch.services.openai_client import request_json_completion, sanitize_json

IDEA = {
    "title": "Warehouse robot fleet manager",
    "tagline": "One console for mixed robot fleets",
    "problem_statement": "Warehouses run robots from several vendors that never talk to each other.",
    "proposed_solution": "A vendor-neutral control layer that schedules every robot from one queue.",
    "uniqueness": "Adapters for the five largest robot vendors.",
    "stage": "Prototype",
    "market_size": "Medium ($1B - $10B)",
}

GOOD_REVIEW = {
    "totalScore": 77.6,
    "breakdown": {"problem": 15, "solution": 14, "uniqueness": 12, "market": 11, "team": 8, "viability": 17},
    "suggestions": ["Add pilot metrics", "Name your first customer"],
}

_RealAsyncClient = httpx.AsyncClient


def _mock_openai(handler):
    """Route the client's HTTP calls through *handler*."""
    transport = httpx.MockTransport(handler)
    return patch.object(
        openai_client.httpx,
        "AsyncClient",
        lambda **kwargs: _RealAsyncClient(transport=transport, **kwargs),
    )


def _completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class TestWellFormedReview:
    def test_good_review(self):
        assert is_well_formed_review(GOOD_REVIEW)

    def test_partial_breakdown_is_enough(self):
        assert is_well_formed_review({"totalScore": 40, "breakdown": {"market": 10}})

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "77",
            {},
            {"totalScore": "77", "breakdown": {"problem": 15}},
            {"totalScore": True, "breakdown": {"problem": 15}},
            {"totalScore": float("nan"), "breakdown": {"problem": 15}},
            {"totalScore": 77},
            {"totalScore": 77, "breakdown": []},
            {"totalScore": 77, "breakdown": {"vibes": 15}},
            {"totalScore": 77, "breakdown": {"problem": "high"}},
        ],
    )
    def test_malformed_reviews(self, payload):
        assert not is_well_formed_review(payload)


class TestResolveScore:
    def test_external_review_takes_precedence(self):
        resolved = resolve_score(IDEA, GOOD_REVIEW)
        assert resolved.source == "ai"
        assert resolved.score == 78
        assert resolved.breakdown["problem"] == 15.0
        assert resolved.suggestions == ["Add pilot metrics", "Name your first customer"]

    def test_external_score_is_clamped(self):
        assert resolve_score(IDEA, {"totalScore": 250, "breakdown": {"team": 5}}).score == 100
        assert resolve_score(IDEA, {"totalScore": -3, "breakdown": {"team": 5}}).score == 0

    def test_suggestions_are_coerced(self):
        resolved = resolve_score(IDEA, {"totalScore": 50, "breakdown": {"team": 5}, "suggestions": "Hire a CTO"})
        assert resolved.suggestions == ["Hire a CTO"]

    def test_malformed_review_falls_back_to_heuristic(self):
        local = evaluate_idea(IDEA)
        resolved = resolve_score(IDEA, {"totalScore": "great", "breakdown": {}})
        assert resolved.source == "heuristic"
        assert resolved.score == local.score
        assert resolved.suggestions == local.warnings
        assert resolved.breakdown == local.breakdown.model_dump()

    def test_no_review(self):
        assert resolve_score(IDEA).source == "heuristic"


class TestEvaluateWithAI:
    def test_returns_none_without_key(self):
        with patch("venturematch.services.ai_evaluator.get_openai_key", return_value=None):
            assert asyncio.run(evaluate_with_ai(IDEA)) is None

    def test_returns_well_formed_review(self):
        with (
            patch("venturematch.services.ai_evaluator.get_openai_key", return_value="sk-test"),
            patch(
                "venturematch.services.ai_evaluator.request_json_completion",
                new=AsyncMock(return_value=GOOD_REVIEW),
            ) as mocked,
        ):
            assert asyncio.run(evaluate_with_ai(IDEA)) == GOOD_REVIEW
        prompt = mocked.await_args.kwargs["messages"][1]["content"]
        assert "Warehouse robot fleet manager" in prompt
        assert "Team Background: Not provided" in prompt

    def test_discards_malformed_review(self):
        with (
            patch("venturematch.services.ai_evaluator.get_openai_key", return_value="sk-test"),
            patch(
                "venturematch.services.ai_evaluator.request_json_completion",
                new=AsyncMock(return_value={"score": 90}),
            ),
        ):
            assert asyncio.run(evaluate_with_ai(IDEA)) is None

    def test_client_failure_returns_none(self):
        with (
            patch("venturematch.services.ai_evaluator.get_openai_key", return_value="sk-test"),
            patch(
                "venturematch.services.ai_evaluator.request_json_completion",
                new=AsyncMock(return_value=None),
            ),
        ):
            assert asyncio.run(evaluate_with_ai(IDEA)) is None


class TestSanitizeJson:
    def test_markdown_fence(self):
        assert json.loads(sanitize_json('```json\n{"a": 1}\n```')) == {"a": 1}

    def test_prose_and_trailing_commas(self):
        raw = 'Here you go: {"a": [1, 2,], "b": {"c": 3,},} Thanks!'
        assert json.loads(sanitize_json(raw)) == {"a": [1, 2], "b": {"c": 3}}

    def test_no_object(self):
        with pytest.raises(ValueError):
            sanitize_json("no json here")


class TestRequestJsonCompletion:
    MESSAGES = [{"role": "user", "content": "score this"}]

    def test_no_key_returns_none(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert asyncio.run(request_json_completion(messages=self.MESSAGES)) is None

    def test_parses_json_content(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return _completion(json.dumps(GOOD_REVIEW))

        with _mock_openai(handler):
            result = asyncio.run(
                request_json_completion(messages=self.MESSAGES, api_key="sk-test", model="gpt-test")
            )
        assert result == GOOD_REVIEW
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-test"
        assert seen["body"]["response_format"] == {"type": "json_object"}

    def test_retries_once_after_bad_content(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                return _completion("not json at all")
            return _completion('{"totalScore": 60, "breakdown": {"team": 7}}')

        with _mock_openai(handler):
            result = asyncio.run(request_json_completion(messages=self.MESSAGES, api_key="sk-test"))
        assert len(calls) == 2
        assert result["totalScore"] == 60

    def test_gives_up_after_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, text="upstream error")

        with _mock_openai(handler):
            result = asyncio.run(request_json_completion(messages=self.MESSAGES, api_key="sk-test"))
        assert result is None
        assert len(calls) == 2

    def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _mock_openai(handler):
            result = asyncio.run(request_json_completion(messages=self.MESSAGES, api_key="sk-test"))
        assert result is None
