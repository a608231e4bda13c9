"""
Tests for the response parser. The parser must never raise.
"""

from __future__ import annotations

import json

import pytest

from solver.errors import ParseError
from solver.models import ParseStatus, ReframingTechnique
from solver.parser import extract_json_array, parse_reframings, parse_solutions

_SOLUTIONS = [
    {"title": "Mentoring", "description": "Pair people", "content": "Long text.", "icon": "fas fa-users"},
    {"title": "Automation", "description": "Script it", "content": "More text.", "icon": "fas fa-cogs"},
]


class TestExtractJsonArray:
    def test_whole_text_is_json(self):
        data, status = extract_json_array(json.dumps(_SOLUTIONS))
        assert data == _SOLUTIONS
        assert status == ParseStatus.PARSED

    @pytest.mark.parametrize(
        "before, after",
        [
            ("Here are your solutions:\n", "\nHope this helps!"),
            ("```json\n", "\n```"),
            ("", " -- end"),
        ],
    )
    def test_array_embedded_in_prose(self, before, after):
        data, status = extract_json_array(before + json.dumps(_SOLUTIONS, indent=2) + after)
        assert data == _SOLUTIONS
        assert status == ParseStatus.EXTRACTED

    def test_object_wrapping_array_falls_through_to_extraction(self):
        data, status = extract_json_array(json.dumps({"solutions": ["a", "b"]}))
        assert data == ["a", "b"]
        assert status == ParseStatus.EXTRACTED

    def test_no_array_raises_parse_error(self):
        with pytest.raises(ParseError):
            extract_json_array("no brackets at all")

    def test_invalid_span_raises_parse_error(self):
        with pytest.raises(ParseError):
            extract_json_array("see [this] and [that]")


class TestParseSolutions:
    def test_scenario_blah_x_blah(self):
        result = parse_solutions('blah [{"title":"X"}] blah')
        assert result.status == ParseStatus.EXTRACTED
        assert len(result.solutions) == 1
        assert result.solutions[0].model_dump(by_alias=True) == {
            "title": "X",
            "description": "",
            "content": "",
            "icon": "fas fa-lightbulb",
            "isAI": True,
        }

    def test_defaults_for_missing_fields(self):
        result = parse_solutions('[{"content": "a"}, {}, {"title": "", "icon": null}]')
        titles = [s.title for s in result.solutions]
        assert titles == ["Solution 1", "Solution 2", "Solution 3"]
        assert all(s.icon == "fas fa-lightbulb" for s in result.solutions)
        assert all(s.is_ai for s in result.solutions)

    def test_is_ai_forced_true(self):
        result = parse_solutions('[{"title": "T", "isAI": false}]')
        assert result.solutions[0].is_ai is True

    def test_provided_icon_kept(self):
        result = parse_solutions(json.dumps(_SOLUTIONS))
        assert [s.icon for s in result.solutions] == ["fas fa-users", "fas fa-cogs"]
        assert result.status == ParseStatus.PARSED

    def test_string_items_become_content(self):
        result = parse_solutions('["Just do it"]')
        assert result.solutions[0].title == "Solution 1"
        assert result.solutions[0].content == "Just do it"

    @pytest.mark.parametrize(
        "text",
        ["Sorry, I cannot help with that.", "", "{not json}", "[broken, json", "[1, 2,]"],
    )
    def test_fallback_single_record(self, text):
        result = parse_solutions(text)
        assert result.status == ParseStatus.FALLBACK
        assert len(result.solutions) == 1
        fallback = result.solutions[0]
        assert fallback.title == "AI Solution Approach"
        assert fallback.content == text
        assert fallback.icon == "fas fa-robot"
        assert fallback.is_ai is True


class TestParseReframings:
    def test_three_strings_get_techniques_in_order(self):
        result = parse_reframings('["inverse", "system", "random"]')
        assert result.status == ParseStatus.PARSED
        assert result.texts == ["inverse", "system", "random"]
        assert [r.technique for r in result.reframings] == list(ReframingTechnique)

    def test_embedded_array(self):
        result = parse_reframings('Sure!\n["a", "b", "c"]\nEnjoy.')
        assert result.status == ParseStatus.EXTRACTED
        assert result.texts == ["a", "b", "c"]

    def test_extra_items_have_no_technique(self):
        result = parse_reframings('["a", "b", "c", "d"]')
        assert result.reframings[3].technique is None

    def test_non_string_items_are_stringified(self):
        result = parse_reframings('[{"text": "a"}]')
        assert result.texts == ['{"text": "a"}']

    def test_fallback_is_one_element_sequence(self):
        result = parse_reframings("Think about it differently.")
        assert result.status == ParseStatus.FALLBACK
        assert result.texts == ["Think about it differently."]
        assert result.reframings[0].technique is None
