"""Text feature extractors shared by the scoring engine.

Every function here is pure and total: ``None``, non-string values and the
empty string all produce the zero value (``[]``, ``0``, ``False``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..constants import SIMILARITY_KEYWORD_LIMIT, STOP_WORDS

_PUNCTUATION_RE = re.compile(r"[^\w\s]", re.ASCII)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_WORD_RE = re.compile(r"\b\w+\b", re.ASCII)
_DIGIT_RE = re.compile(r"\d")
_REPEATED_CHAR_RE = re.compile(r"([a-zA-Z0-9])\1{3,}")
_URL_PREFIX_RE = re.compile(r"^https?://", re.IGNORECASE)
_LETTER_RE = re.compile(r"[a-z]", re.IGNORECASE)
_ALL_CAPS_RE = re.compile(r"\b[A-Z]{4,}\b")

GIBBERISH_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"lorem\s+ipsum", re.IGNORECASE),
    re.compile(r"^test$", re.IGNORECASE),
    re.compile(r"^asdf$", re.IGNORECASE),
    re.compile(r"^qwerty$", re.IGNORECASE),
    re.compile(r"^12345+$"),
)


def as_text(value: Any) -> str:
    """Coerce an arbitrary field value to text; anything but ``str`` is ``""``."""
    return value if isinstance(value, str) else ""


def field(idea: Any, key: str) -> str:
    """Read a text field from a mapping or an attribute-bearing object."""
    if idea is None:
        return ""
    if isinstance(idea, Mapping):
        return as_text(idea.get(key))
    return as_text(getattr(idea, key, None))


def extract_keywords(text: Any, limit: int = SIMILARITY_KEYWORD_LIMIT) -> list[str]:
    """Lowercased content words of *text*, stop words removed, first *limit* kept."""
    text = as_text(text)
    if not text:
        return []
    words = _PUNCTUATION_RE.sub(" ", text.lower()).split()
    keywords = [w for w in words if len(w) > 2 and w not in STOP_WORDS]
    return keywords[:limit]


def sentence_count(text: Any) -> int:
    return len([s for s in _SENTENCE_SPLIT_RE.split(as_text(text)) if s])


def word_count(text: Any) -> int:
    return len(_WORD_RE.findall(as_text(text)))


def avg_sentence_length(text: Any) -> float:
    """Words per sentence; text without sentence breaks counts as one unit."""
    sentences = sentence_count(text)
    words = word_count(text)
    return float(words) if sentences == 0 else words / sentences


def has_numbers(text: Any) -> bool:
    return bool(_DIGIT_RE.search(as_text(text)))


def has_repeated_chars(text: Any) -> bool:
    """True for any run of 4+ identical alphanumeric characters ("aaaa", "1111")."""
    return bool(_REPEATED_CHAR_RE.search(as_text(text)))


def is_url_only(text: Any) -> bool:
    stripped = as_text(text).strip()
    return bool(_URL_PREFIX_RE.match(stripped)) and len(stripped.split()) < 3


def is_gibberish(text: Any) -> bool:
    stripped = as_text(text).strip()
    return any(p.search(stripped) for p in GIBBERISH_PATTERNS)


def alpha_ratio(text: Any) -> float:
    text = as_text(text)
    return len(_LETTER_RE.findall(text)) / (len(text) or 1)


def count_all_caps_words(text: Any) -> int:
    return len(_ALL_CAPS_RE.findall(as_text(text)))
