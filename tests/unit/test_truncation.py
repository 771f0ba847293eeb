"""Unit tests for recursive record truncation.

This module tests the depth-first walker that replaces long strings and
large deep values with placeholders while honoring expand fields.
"""

import copy
import json

import pytest

from pulse_subregistry_mcp.exceptions import RecordTooDeepError
from pulse_subregistry_mcp.shaping import (
    RecordTruncator,
    TruncationConfig,
    truncate_record,
)


def string_placeholder(path):
    return f'[TRUNCATED - use expand_fields: ["{path}"] to see full content]'


def deep_placeholder(path):
    return f'[DEEP OBJECT TRUNCATED - use expand_fields: ["{path}"] to see full content]'


def large_deep_object():
    return {
        "field1": "a" * 100,
        "field2": "b" * 100,
        "field3": "c" * 100,
        "field4": "d" * 100,
        "field5": "e" * 100,
        "nested": {"more": "data"},
    }


def nest_under_meta(value):
    # servers[0].server.meta.tools sits at depth 5
    return {"servers": [{"server": {"meta": {"tools": value}}}]}


class TestStringRule:
    """Test truncation of long string leaves."""

    def test_truncates_strings_longer_than_limit(self):
        result = truncate_record({"text": "a" * 500})
        assert result == {"text": string_placeholder("text")}

    def test_keeps_strings_at_or_below_limit(self):
        record = {"short": "a" * 100, "edge": "b" * 200}
        assert truncate_record(record) == record

    def test_placeholder_names_nested_path(self):
        result = truncate_record({"server": {"description": "a" * 500}})
        assert result["server"]["description"] == string_placeholder(
            "server.description"
        )

    def test_placeholder_uses_wildcard_for_array_paths(self):
        result = truncate_record(
            {"servers": [{"description": "c" * 250}, {"description": "short"}]}
        )
        assert result["servers"][0]["description"] == string_placeholder(
            "servers[].description"
        )
        assert result["servers"][1]["description"] == "short"

    def test_sibling_values_are_untouched(self):
        result = truncate_record({"server": {"description": "b" * 250, "name": "short"}})
        assert result["server"]["name"] == "short"

    def test_top_level_string(self):
        assert truncate_record("x" * 300) == string_placeholder("")
        assert truncate_record("x") == "x"

    def test_strings_inside_arrays(self):
        result = truncate_record({"tags": ["ok", "z" * 300]})
        assert result == {"tags": ["ok", string_placeholder("tags[]")]}


class TestScalars:
    """Test that non-string scalars pass through."""

    def test_null_numbers_and_booleans(self):
        record = {"none": None, "count": 42, "ratio": 0.5, "enabled": True}
        assert truncate_record(record) == record

    @pytest.mark.parametrize("value", [None, 0, 3.14, False, "", [], {}])
    def test_scalar_and_empty_roots(self, value):
        assert truncate_record(value) == value


class TestDeepCollapse:
    """Test collapsing of large values at or beyond the depth threshold."""

    def test_collapses_large_object_at_depth_five(self):
        result = truncate_record(nest_under_meta(large_deep_object()))
        assert result["servers"][0]["server"]["meta"]["tools"] == deep_placeholder(
            "servers[].server.meta.tools"
        )

    def test_collapses_large_array_at_depth_five(self):
        result = truncate_record(nest_under_meta(["x" * 150] * 5))
        assert result["servers"][0]["server"]["meta"]["tools"] == deep_placeholder(
            "servers[].server.meta.tools"
        )

    def test_does_not_collapse_at_depth_four(self):
        record = {"servers": [{"server": {"meta": large_deep_object()}}]}
        result = truncate_record(record)
        meta = result["servers"][0]["server"]["meta"]
        assert isinstance(meta, dict)
        assert meta["field1"] == "a" * 100
        assert meta["field2"] == "b" * 100

    def test_keeps_small_deep_object(self):
        small = {"field1": "small", "field2": "value"}
        result = truncate_record(nest_under_meta(small))
        assert result["servers"][0]["server"]["meta"]["tools"] == small

    def test_shallow_objects_are_never_collapsed(self):
        record = {
            "servers": [
                {"server": {"field1": "a" * 600, "field2": "b" * 600, "field3": "c" * 600}}
            ]
        }
        result = truncate_record(record)
        server = result["servers"][0]["server"]
        assert isinstance(server, dict)
        assert server["field1"] == string_placeholder("servers[].server.field1")
        assert server["field2"] == string_placeholder("servers[].server.field2")

    def test_shallow_immunity_with_huge_values(self):
        # Depths 1-4 hold many small leaves adding up far beyond the limit.
        level4 = {f"k{i}": "v" * 150 for i in range(50)}
        record = {"a": {"b": {"c": {"d": level4}}}}
        result = truncate_record(record)
        assert result == record

    def test_descendants_of_collapsed_node_are_dropped(self):
        value = large_deep_object()
        value["nested"] = {"secret": "s" * 300}
        result = truncate_record(nest_under_meta(value))
        assert "s" * 300 not in json.dumps(result)
        assert "nested" not in json.dumps(result)


class TestExpansion:
    """Test that expand fields suppress truncation."""

    def test_exact_path(self):
        long = "d" * 250
        result = truncate_record(
            {"server": {"description": long}}, ["server.description"]
        )
        assert result["server"]["description"] == long

    def test_wildcard_path_covers_all_elements(self):
        long = "e" * 250
        record = {
            "servers": [
                {"server": {"description": long}},
                {"server": {"description": long}},
            ]
        }
        result = truncate_record(record, ["servers[].server.description"])
        assert result == record

    def test_nested_wildcard(self):
        long = "f" * 250
        result = truncate_record(
            {"server": {"packages": [{"readme": long}]}},
            ["server.packages[].readme"],
        )
        assert result["server"]["packages"][0]["readme"] == long

    def test_expanding_deep_object_keeps_it_whole(self):
        value = {"field1": "a" * 200, "field2": "b" * 200, "field3": "c" * 200}
        result = truncate_record(
            nest_under_meta(value), ["servers[].server.meta.tools"]
        )
        assert result["servers"][0]["server"]["meta"]["tools"] == value

    def test_subtree_expansion_disables_string_rule_below(self):
        value = large_deep_object()
        value["long"] = "L" * 1000
        record = nest_under_meta(value)
        result = truncate_record(record, ["servers"])
        assert result == record

    def test_concrete_index_expands_only_that_element(self):
        long = "g" * 300
        record = {"servers": [{"d": long}, {"d": long}]}
        result = truncate_record(record, ["servers[1]"])
        assert result["servers"][0]["d"] == string_placeholder("servers[].d")
        assert result["servers"][1]["d"] == long

    def test_expanding_a_descendant_does_not_protect_a_collapsed_ancestor(self):
        # The placeholder names the ancestor, which is the path to expand.
        result = truncate_record(
            nest_under_meta(large_deep_object()),
            ["servers[].server.meta.tools.field1"],
        )
        assert result["servers"][0]["server"]["meta"]["tools"] == deep_placeholder(
            "servers[].server.meta.tools"
        )

    def test_unmatched_expand_fields_are_ignored(self):
        record = {"text": "a" * 500}
        assert truncate_record(record, ["txet", "nothing[].here"]) == truncate_record(
            record
        )

    def test_expanded_subtree_is_identical_to_input(self, sample_list_payload):
        result = truncate_record(sample_list_payload, ["servers[].server"])
        for original, shaped in zip(
            sample_list_payload["servers"], result["servers"]
        ):
            assert json.dumps(shaped["server"]) == json.dumps(original["server"])


class TestScenarios:
    """End-to-end scenarios over small records."""

    def test_short_record_unchanged(self):
        assert truncate_record({"a": "short"}, []) == {"a": "short"}

    def test_long_string_record(self):
        assert truncate_record({"a": "x" * 300}, []) == {
            "a": '[TRUNCATED - use expand_fields: ["a"] to see full content]'
        }

    def test_package_collapses_when_threshold_reaches_it(self):
        record = {"servers": [{"pkg": {"readme": "r" * 2000}}]}
        config = TruncationConfig(depth_threshold=3)
        result = truncate_record(record, [], config)
        assert result == {
            "servers": [
                {
                    "pkg": '[DEEP OBJECT TRUNCATED - use expand_fields: '
                    '["servers[].pkg"] to see full content]'
                }
            ]
        }

    def test_package_expanded(self):
        record = {"servers": [{"pkg": {"readme": "r" * 2000}}]}
        config = TruncationConfig(depth_threshold=3)
        assert truncate_record(record, ["servers[].pkg"], config) == record

    def test_package_with_default_threshold_truncates_only_the_string(self):
        # servers[0].pkg is at depth 3, below the default threshold.
        record = {"servers": [{"pkg": {"readme": "r" * 2000}}]}
        result = truncate_record(record)
        assert result["servers"][0]["pkg"]["readme"] == string_placeholder(
            "servers[].pkg.readme"
        )

    def test_string_rule_applies_to_deep_string_leaf(self):
        record = {"a": {"b": {"c": {"d": {"e": "q" * 1000}}}}}
        result = truncate_record(record)
        assert result["a"]["b"]["c"]["d"]["e"] == string_placeholder("a.b.c.d.e")


class TestPurity:
    """Test determinism and non-mutation."""

    def test_input_is_not_mutated(self, sample_list_payload):
        before = copy.deepcopy(sample_list_payload)
        truncate_record(sample_list_payload)
        truncate_record(sample_list_payload, ["servers[].server"])
        assert sample_list_payload == before

    def test_output_containers_are_new_objects(self):
        record = {"a": {"b": [1, 2]}}
        result = truncate_record(record, ["a"])
        assert result == record
        assert result is not record
        assert result["a"] is not record["a"]
        assert result["a"]["b"] is not record["a"]["b"]

    def test_deterministic(self, sample_list_payload):
        first = truncate_record(sample_list_payload, ["servers[]._meta"])
        second = truncate_record(sample_list_payload, ["servers[]._meta"])
        assert json.dumps(first) == json.dumps(second)

    def test_key_order_is_preserved(self):
        record = {"z": 1, "a": "x" * 300, "m": 2}
        assert list(truncate_record(record)) == ["z", "a", "m"]

    def test_small_record_is_a_fixed_point(self, sample_list_payload):
        once = truncate_record(sample_list_payload)
        assert truncate_record(once) == once
        assert truncate_record(once, ["unrelated"]) == once

    def test_output_is_valid_json(self, sample_list_payload):
        result = truncate_record(sample_list_payload)
        assert json.loads(json.dumps(result)) == result


class TestRecordTruncator:
    """Test the per-invocation truncator object."""

    def test_collects_normalized_paths_once(self):
        truncator = RecordTruncator()
        truncator.truncate({"servers": [{"d": "x" * 300}, {"d": "y" * 300}]})
        assert truncator.truncated_paths == ["servers[].d"]

    def test_alternate_limits(self):
        truncator = RecordTruncator(config=TruncationConfig(string_limit=5))
        assert truncator.truncate({"a": "123456", "b": "12345"}) == {
            "a": string_placeholder("a"),
            "b": "12345",
        }

    def test_max_depth_ceiling(self):
        config = TruncationConfig(max_depth=2)
        with pytest.raises(RecordTooDeepError) as exc_info:
            truncate_record({"a": {"b": {"c": {}}}}, ["a"], config)
        assert exc_info.value.path == "a.b.c"
        assert exc_info.value.details["max_depth"] == 2

    def test_max_depth_only_limits_containers(self):
        config = TruncationConfig(max_depth=2)
        record = {"a": {"b": {"c": 1}}}
        assert truncate_record(record, [], config) == record
        with pytest.raises(RecordTooDeepError):
            truncate_record({"a": {"b": {"c": []}}}, [], config)
