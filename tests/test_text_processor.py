"""
Tests for JSON extraction from noisy model output
"""
import pytest

from appscout.utils.text_processor import extract_fenced_block, extract_json, find_json_span


class TestExtractFencedBlock:

    def test_labeled_fence_preferred(self):
        text = "```\nnot this\n```\nthen\n```json\n{\"a\": 1}\n```"
        assert extract_fenced_block(text) == '{"a": 1}'

    def test_any_fence_when_no_label(self):
        assert extract_fenced_block("see:\n```\n[1, 2]\n```") == "[1, 2]"

    def test_no_fence_returns_text(self):
        assert extract_fenced_block('{"a": 1}') == '{"a": 1}'


class TestFindJsonSpan:

    def test_braces_inside_strings_ignored(self):
        text = 'x {"a": "}{", "b": [1, {"c": "]"}]} y }'
        start, end = find_json_span(text)
        assert text[start:end] == '{"a": "}{", "b": [1, {"c": "]"}]}'

    def test_escaped_quote_inside_string(self):
        text = '{"a": "say \\"hi}\\""} trailing }'
        start, end = find_json_span(text)
        assert text[start:end] == '{"a": "say \\"hi}\\""}'

    def test_unbalanced_returns_none(self):
        assert find_json_span('{"a": [1, 2}') is None
        assert find_json_span('{"a": 1') is None

    def test_no_brackets_returns_none(self):
        assert find_json_span("nothing here") is None


class TestExtractJson:

    def test_fenced_object_with_prose(self):
        text = 'Here is the analysis you asked for:\n```json\n{"rating": "4.5", "nested": {"x": [1, 2]}}\n```\nHope this helps!'
        assert extract_json(text) == {"rating": "4.5", "nested": {"x": [1, 2]}}

    def test_prose_padded_array(self):
        text = 'Found these apps: [{"name": "A"}, {"name": "B"}] - let me know.'
        assert extract_json(text) == [{"name": "A"}, {"name": "B"}]

    def test_earlier_marker_wins(self):
        assert extract_json('[{"a": 1}]') == [{"a": 1}]
        assert extract_json('{"list": [1, 2]}') == {"list": [1, 2]}

    def test_first_of_two_objects(self):
        assert extract_json('{"a": 1} and also {"b": 2}') == {"a": 1}

    @pytest.mark.parametrize("text", ["", "   \n ", "no json at all", '{"a": 1', '[1, 2', "{not: json}"])
    def test_failures_return_none(self, text):
        assert extract_json(text) is None

    def test_non_string_returns_none(self):
        assert extract_json(None) is None

    def test_expected_type_mismatch(self):
        assert extract_json('[1, 2]', expected_type=dict) is None
        assert extract_json('{"a": 1}', expected_type=dict) == {"a": 1}

    def test_failure_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="appscout.utils.text_processor"):
            assert extract_json("{bad json}") is None
        assert "JSON extraction failed" in caplog.text

    def test_deep_nesting_returns_none(self, caplog):
        text = "[" * 100000 + "]" * 100000
        with caplog.at_level("WARNING", logger="appscout.utils.text_processor"):
            assert extract_json(text) is None
        assert "JSON extraction failed" in caplog.text
