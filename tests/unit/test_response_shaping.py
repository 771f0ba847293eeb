"""Unit tests for response shaping (exclusion, truncation, rendering)."""

import json
import logging

from pulse_subregistry_mcp.shaping import (
    PlaceholderKind,
    TruncationConfig,
    parse_placeholder,
    shape_record,
    shape_response,
)


def test_shape_response_renders_indented_json(sample_list_payload):
    text = shape_response({"a": 1})
    assert text == '{\n  "a": 1\n}'
    assert json.loads(shape_response(sample_list_payload))["metadata"]["count"] == 2


def test_compact_rendering():
    assert shape_response({"a": [1, 2]}, indent=None) == '{"a": [1, 2]}'


def test_long_readme_is_collapsed_and_expandable(sample_list_payload, long_readme):
    shaped = json.loads(shape_response(sample_list_payload))
    package = shaped["servers"][0]["server"]["packages"][0]
    # packages[0] sits at depth 5 and its readme pushes it over the limit
    assert parse_placeholder(package) == (
        PlaceholderKind.DEEP,
        "servers[].server.packages[]",
    )

    expanded = json.loads(
        shape_response(sample_list_payload, expand_fields=["servers[].server.packages[]"])
    )
    assert expanded["servers"][0]["server"]["packages"][0]["readme"] == long_readme


def test_exclusion_happens_before_truncation(sample_list_payload):
    shaped = shape_record(
        sample_list_payload,
        exclude_fields=["servers[].server.packages"],
    )
    assert "packages" not in shaped["servers"][0]["server"]
    assert "TRUNCATED" not in json.dumps(shaped)


def test_custom_config_is_honored():
    shaped = shape_record({"name": "abcdef"}, config=TruncationConfig(string_limit=3))
    assert parse_placeholder(shaped["name"]) == (PlaceholderKind.STRING, "name")


def test_unicode_is_not_escaped():
    assert "café" in shape_response({"name": "café"})


def test_debug_log_reports_truncation_once(sample_list_payload, caplog):
    with caplog.at_level(logging.DEBUG, logger="pulse_subregistry_mcp.shaping"):
        shape_record(sample_list_payload)
    messages = [
        r.getMessage() for r in caplog.records if r.name.startswith("pulse_subregistry_mcp.shaping")
    ]
    assert messages == ["Truncated 1 path(s): servers[].server.packages[]"]
