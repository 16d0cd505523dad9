"""Tests for JSON extraction from free-form model output."""

import pytest

from app.coach.parsing import extract_json_object, first_balanced_object


class TestFirstBalancedObject:
    def test_nested_object(self):
        assert first_balanced_object('x {"a": {"b": 1}} y') == '{"a": {"b": 1}}'

    def test_braces_inside_strings_ignored(self):
        text = 'prefix {"note": "use } and { freely", "n": 2} suffix'
        assert first_balanced_object(text) == '{"note": "use } and { freely", "n": 2}'

    def test_escaped_quote_inside_string(self):
        text = r'{"q": "say \"hi\" }"}'
        assert first_balanced_object(text) == text

    def test_unbalanced_returns_none(self):
        assert first_balanced_object('{"a": 1') is None

    def test_no_object(self):
        assert first_balanced_object("no json here") is None


class TestExtractJsonObject:
    def test_fenced_block(self):
        text = 'Here you go:\n```json\n{"summary": "ok", "recovery_score": 7}\n```\nEnjoy.'
        assert extract_json_object(text) == {"summary": "ok", "recovery_score": 7}

    def test_fence_without_language(self):
        assert extract_json_object('```\n{"a": 1}\n```') == {"a": 1}

    def test_bare_object_with_chatter(self):
        assert extract_json_object('Sure! {"weeks": []} Hope it helps') == {"weeks": []}

    def test_falls_back_to_raw_text_when_fence_is_broken(self):
        text = '```json\n{not json}\n```\nActual: {"ok": true}'
        assert extract_json_object(text) == {"ok": True}

    @pytest.mark.parametrize("text", ["", "plain prose", "[1, 2, 3]", '{"a": 1,}', "{'single': 'quotes'}"])
    def test_unusable_output_returns_none(self, text):
        assert extract_json_object(text) is None
