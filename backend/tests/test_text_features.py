"""Text feature extractor tests: keywords, sentence stats, spam detectors."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from venturematch.services.text_features import (
    alpha_ratio,
    avg_sentence_length,
    count_all_caps_words,
    extract_keywords,
    field,
    has_numbers,
    has_repeated_chars,
    is_gibberish,
    is_url_only,
    sentence_count,
    word_count,
)


class TestExtractKeywords:
    def test_drops_stop_words_and_short_tokens(self):
        assert extract_keywords("The app is for an AI tutor") == ["app", "tutor"]

    def test_lowercases_and_strips_punctuation(self):
        assert extract_keywords("Smart, Reusable containers!") == ["smart", "reusable", "containers"]

    def test_keeps_duplicates_in_order(self):
        assert extract_keywords("loans loans credit") == ["loans", "loans", "credit"]

    def test_limit(self):
        text = " ".join(f"word{i}" for i in range(50))
        assert len(extract_keywords(text)) == 20
        assert extract_keywords(text, limit=3) == ["word0", "word1", "word2"]

    def test_non_ascii_letters_are_separators(self):
        # "café" splits into "caf" + "é"; only "caf" survives the length filter
        assert extract_keywords("café") == ["caf"]

    def test_empty_and_non_text(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []
        assert extract_keywords(42) == []


class TestSentenceStats:
    def test_sentence_count_ignores_empty_fragments(self):
        assert sentence_count("One. Two!! Three?") == 3
        assert sentence_count("No terminator here") == 1
        assert sentence_count("") == 0

    def test_word_count(self):
        assert word_count("Hello, world - again") == 3
        assert word_count(None) == 0

    def test_avg_sentence_length(self):
        assert avg_sentence_length("One two three. Four five six.") == 3.0

    def test_avg_sentence_length_of_empty_text(self):
        assert avg_sentence_length("") == 0.0

    def test_avg_sentence_length_of_punctuation_only(self):
        assert avg_sentence_length("...") == 0.0


class TestDetectors:
    def test_has_numbers(self):
        assert has_numbers("450 students")
        assert not has_numbers("many students")
        assert not has_numbers(None)

    def test_repeated_chars(self):
        assert has_repeated_chars("greaaaat")
        assert has_repeated_chars("11111")
        assert not has_repeated_chars("aaa")
        assert not has_repeated_chars("!!!!")

    def test_url_only(self):
        assert is_url_only("https://example.com")
        assert is_url_only("  http://example.com see  ")
        assert not is_url_only("https://example.com has the full writeup")
        assert not is_url_only("see https://example.com")

    def test_gibberish(self):
        assert is_gibberish("Lorem ipsum dolor sit amet")
        assert is_gibberish("  TEST ")
        assert is_gibberish("asdf")
        assert is_gibberish("12345")
        assert not is_gibberish("A test harness for payment APIs")
        assert not is_gibberish("1234")

    def test_alpha_ratio(self):
        assert alpha_ratio("abcd") == 1.0
        assert alpha_ratio("ab!!") == 0.5
        assert alpha_ratio("") == 0.0

    def test_all_caps_words(self):
        assert count_all_caps_words("FREE MONEY for ALL") == 2
        assert count_all_caps_words("AI and ML") == 0


class TestField:
    def test_mapping_and_object(self):
        class Obj:
            title = "From attribute"

        assert field({"title": "From mapping"}, "title") == "From mapping"
        assert field(Obj(), "title") == "From attribute"

    def test_missing_or_non_text(self):
        assert field({}, "title") == ""
        assert field({"title": 7}, "title") == ""
        assert field(None, "title") == ""
