"""
Tests for response extraction.
"""

import pytest

from rectospec.llm.extractor import extract_fenced_block, parse_json_payload


class TestExtractFencedBlock:
    """Test fenced block extraction."""

    def test_tagged_block(self):
        """Test the interior of a tagged block is returned."""
        text = "Here you go:\n```gherkin\nFeature: Login\n  Scenario: A\n```\nThanks"
        assert extract_fenced_block(text, "gherkin") == "Feature: Login\n  Scenario: A"

    def test_first_block_wins(self):
        """Test only the first tagged block is used."""
        text = "```gherkin\nFeature: One\n```\n```gherkin\nFeature: Two\n```"
        assert extract_fenced_block(text, "gherkin") == "Feature: One"

    def test_no_block(self):
        """Test the whole trimmed text is the fallback."""
        assert extract_fenced_block("  Feature: Plain\n", "gherkin") == "Feature: Plain"

    def test_other_tag_ignored(self):
        """Test a block with a different tag does not match."""
        text = "```json\n{}\n```"
        assert extract_fenced_block(text, "gherkin") == text

    def test_crlf(self):
        """Test Windows line endings after the tag."""
        assert extract_fenced_block("```gherkin\r\nFeature: W\r\n```", "gherkin") == "Feature: W"

    def test_empty(self):
        """Test empty input never raises."""
        assert extract_fenced_block("", "gherkin") == ""
        assert extract_fenced_block(None, "gherkin") == ""


class TestParseJsonPayload:
    """Test JSON payload decoding."""

    def test_plain_json(self):
        assert parse_json_payload('{"a": 1}') == {"a": 1}

    def test_json_fence(self):
        """Test a ```json fence is unwrapped."""
        assert parse_json_payload('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_untagged_fence(self):
        """Test an untagged fence is unwrapped."""
        assert parse_json_payload('```\n{"b": true}\n```') == {"b": True}

    def test_surrounding_prose(self):
        """Test the outer object is found inside prose."""
        assert parse_json_payload('Sure! {"c": "d"} Hope that helps.') == {"c": "d"}

    def test_not_json(self):
        """Test undecodable output raises ValueError."""
        with pytest.raises(ValueError):
            parse_json_payload("I cannot do that.")
