import json

import pytest

from section_autogen.models.generation import FailureReason, GenerationFailure, GenerationResult
from section_autogen.normalizer import extract_json_object, settle_section


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"a": 1}', {"a": 1}),
        ('  {"a": {"b": [1, 2]}}\n', {"a": {"b": [1, 2]}}),
        ('Here you go:\n```json\n{"heading": "Ahoj"}\n```', {"heading": "Ahoj"}),
        ("{}", {}),
    ],
)
def test_extracts_objects(raw, expected):
    assert extract_json_object(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "no braces at all", "[1, 2, 3]", '"just a string"', "{not json}", "} backwards {"],
)
def test_returns_none_when_no_object(raw):
    assert extract_json_object(raw) is None


def test_successful_result_keeps_payload():
    result = GenerationResult(section_type="h001", payload={"heading": "Ahoj"})
    data, warning = settle_section("h001", {"heading": "Default"}, result)

    assert data == {"heading": "Ahoj"}
    assert warning is None


def test_failure_falls_back_to_copy_of_defaults():
    defaults = {"heading": "Default", "items": [{"title": "x"}]}
    result = GenerationResult(section_type="sh001", failure=GenerationFailure(FailureReason.empty_output))
    data, warning = settle_section("sh001", defaults, result)

    assert data == defaults
    assert data is not defaults
    assert data["items"] is not defaults["items"]
    assert warning.type == "sh001"
    assert warning.message == 'Empty LLM output for "sh001" -> fallback defaultData'


def test_result_requires_exactly_one_outcome():
    with pytest.raises(ValueError):
        GenerationResult(section_type="h001")
    with pytest.raises(ValueError):
        GenerationResult(
            section_type="h001",
            payload={"a": 1},
            failure=GenerationFailure(FailureReason.invalid_json),
        )


@pytest.mark.parametrize(
    "raw",
    [
        '{"a": 1}',
        '  {"a": {"b": [1, 2]}}\n',
        'Here you go:\n```json\n{"heading": "Ahoj", "items": [{"title": "Služba"}]}\n```',
        'prefix {"nested": {"deep": {"x": null}}} suffix',
    ],
)
def test_extraction_round_trips(raw):
    extracted = extract_json_object(raw)

    assert extracted is not None
    assert extract_json_object(json.dumps(extracted, ensure_ascii=False)) == extracted
    assert extract_json_object(json.dumps(extracted)) == extracted
