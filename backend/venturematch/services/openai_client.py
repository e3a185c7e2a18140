"""Thin OpenAI chat-completions client used for optional AI idea reviews.

All callers MUST use `request_json_completion()` from this module.
This ensures:
  - Model, temperature, timeout, and token limits are read from env.
  - JSON response format is enforced via response_format.
  - 1 retry on failure (HTTP error, timeout or invalid JSON), then None.
  - The client never raises to callers; the heuristic path takes over.
"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration: all read from environment with safe defaults
# ---------------------------------------------------------------------------
_OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
_MAX_RETRIES = 1


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def get_openai_key() -> Optional[str]:
    """Return OPENAI_API_KEY, or None when the AI review is not configured."""
    key = os.getenv("OPENAI_API_KEY", "").strip()
    return key or None


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()


# ---------------------------------------------------------------------------
# JSON sanitizer: extracts valid JSON from LLM output
# ---------------------------------------------------------------------------
def sanitize_json(raw: str) -> str:
    """Extract a JSON object from raw LLM output.

    Handles markdown fences, a leading ``json`` tag, prose around the
    object, and trailing commas before ``}`` or ``]``.

    Raises ValueError if no JSON object is found.
    """
    text = raw.strip().lstrip("\ufeff")

    if text.startswith("```"):
        parts = text.split("```")
        text = parts[1] if len(parts) >= 3 else text[3:]
    text = text.strip()
    if text.lower().startswith("json"):
        text = text[4:].strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ValueError("LLM did not return a JSON object")
    text = text[start : end + 1]

    return re.sub(r",\s*([}\]])", r"\1", text)


def build_payload(
    *,
    model: str,
    messages: List[Dict[str, str]],
    max_tokens: int,
    temperature: float,
) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "response_format": {"type": "json_object"},
    }


async def request_json_completion(
    *,
    messages: List[Dict[str, str]],
    max_tokens: int = 0,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Call chat completions and return the parsed JSON object, or None.

    Parameters
    ----------
    messages : list[dict]
        The messages array (system + user).
    max_tokens : int
        Token limit for the response. 0 = use env default.
    api_key : str, optional
        Override API key (default: from env). None with no env key → None.
    model : str, optional
        Override model name (default: from env).
    """
    api_key = api_key or get_openai_key()
    if not api_key:
        return None
    model = model or get_openai_model()
    if max_tokens <= 0:
        max_tokens = _env_int("OPENAI_MAX_COMPLETION_TOKENS", 800)
    timeout = _env_float("OPENAI_REQUEST_TIMEOUT", 40.0)

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = build_payload(
        model=model,
        messages=messages,
        max_tokens=max_tokens,
        temperature=_env_float("OPENAI_TEMPERATURE", 0.4),
    )

    for attempt in range(_MAX_RETRIES + 1):
        t0 = time.time()
        try:
            print(f"[OPENAI] Calling {model} (attempt {attempt + 1}/{_MAX_RETRIES + 1})")
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(_OPENAI_API_URL, headers=headers, json=payload)
            print(f"[OPENAI] HTTP {response.status_code} ({time.time() - t0:.1f}s)")

            if response.status_code != 200:
                logger.warning("OpenAI error response: %s", response.text[:400])
                continue

            data = response.json()
            raw_content = (data["choices"][0]["message"]["content"] or "").strip()
            if not raw_content:
                logger.warning("OpenAI returned empty content (attempt %d)", attempt + 1)
                continue

            return json.loads(sanitize_json(raw_content))

        except (ValueError, KeyError, IndexError, TypeError) as exc:
            # json.JSONDecodeError is a ValueError
            logger.warning("OpenAI response could not be parsed: %s", exc)
        except httpx.TimeoutException:
            logger.warning("OpenAI request timed out after %.1fs", time.time() - t0)
        except httpx.HTTPError as exc:
            logger.error("OpenAI request failed: %s", exc)
            return None

    return None
