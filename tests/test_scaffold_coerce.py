"""Tests for loopgen.scaffold.coerce - default value coercion."""

from __future__ import annotations

import json

import pytest

from loopgen.errors import UnsupportedPropertyTypeError
from loopgen.models.property import PropertyDefinition
from loopgen.scaffold.coerce import (
    coerce,
    coerce_default,
    format_timestamp,
    parse_number,
    parse_timestamp,
    split_list,
)


class TestCoerceString:
    def test_plain_string_is_default(self):
        assert coerce("string", "hello") == {"default": "hello"}

    def test_uuid_and_guid_become_default_fn(self):
        assert coerce("string", "uuid") == {"defaultFn": "uuid"}
        assert coerce("string", "guid") == {"defaultFn": "guid"}

    def test_uuid_match_is_case_sensitive(self):
        """Only lowercase uuid/guid trigger a generator."""
        assert coerce("string", "UUID") == {"default": "UUID"}


class TestCoerceNumber:
    def test_large_number_uses_double_precision(self):
        """Digits beyond double precision are lost, matching float parsing."""
        result = coerce("number", "55555555555555555555.5")
        assert result == {"default": float("55555555555555555555.5")}
        assert isinstance(result["default"], float)

    def test_integral_value_is_int(self):
        result = coerce("number", "42")
        assert result == {"default": 42}
        assert isinstance(result["default"], int)

    def test_decimal_and_exponent(self):
        assert coerce("number", "3.25")["default"] == 3.25
        assert coerce("number", "-1e3")["default"] == -1000

    def test_not_a_number_is_null(self):
        assert coerce("number", "abc") == {"default": None}
        assert parse_number("1_000") is None


class TestCoerceBoolean:
    @pytest.mark.parametrize("value", ["true", "1", "t"])
    def test_truthy_tokens(self, value: str):
        assert coerce("boolean", value) == {"default": True}

    @pytest.mark.parametrize("value", ["false", "True", "TRUE", "yes", "0"])
    def test_everything_else_is_false(self, value: str):
        assert coerce("boolean", value) == {"default": False}


class TestCoerceObject:
    def test_parses_json(self):
        assert coerce("object", '{"a": [1, 2]}') == {"default": {"a": [1, 2]}}

    def test_malformed_json_propagates(self):
        with pytest.raises(json.JSONDecodeError):
            coerce("object", "{not json")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "{\"a\": NaN}"])
    def test_non_standard_constants_are_rejected(self, value: str):
        with pytest.raises(json.JSONDecodeError, match="Non-standard JSON constant"):
            coerce("object", value)


class TestCoerceArray:
    def test_splits_on_commas_and_whitespace(self):
        result = coerce("array", "AWD,3.2L, navigation")
        assert result == {"default": ["AWD", "3.2L", "navigation"]}

    def test_split_list_drops_empty_edges(self):
        assert split_list(" a ,, b\tc ") == ["a", "b", "c"]

    def test_number_item_type_converts_elements(self):
        assert coerce(["number"], "123456, 98765") == {"default": [123456, 98765]}

    def test_boolean_item_type_converts_elements(self):
        assert coerce(["boolean"], "true f 1") == {"default": [True, False, True]}

    def test_string_item_type_keeps_strings(self):
        assert coerce(["string"], "a b") == {"default": ["a", "b"]}

    def test_multi_item_type_list_is_rejected(self):
        with pytest.raises(UnsupportedPropertyTypeError):
            coerce(["string", "number"], "a")

    def test_custom_item_type_is_rejected(self):
        with pytest.raises(UnsupportedPropertyTypeError, match="Person"):
            coerce(["Person"], "a,b")


class TestCoerceDate:
    @pytest.mark.parametrize("value", ["now", "Now", "NOW"])
    def test_now_is_default_fn(self, value: str):
        assert coerce("date", value) == {"defaultFn": "now"}

    def test_year_month(self):
        assert coerce("date", "2015-11") == {"default": "2015-11-01T00:00:00.000Z"}

    def test_epoch_millis(self):
        assert coerce("date", "1466087191000") == {"default": "2016-06-16T14:26:31.000Z"}

    def test_full_timestamp_with_offset_is_normalized_to_utc(self):
        result = coerce("date", "2020-01-02T03:04:05.678+02:00")
        assert result == {"default": "2020-01-02T01:04:05.678Z"}

    def test_year_only(self):
        assert coerce("date", "1999") == {"default": "1999-01-01T00:00:00.000Z"}

    def test_conversion_emits_warning(self, capsys):
        coerce("date", "2015-11-03")
        assert "ISO formatting" in capsys.readouterr().err

    def test_invalid_date_is_null(self, capsys):
        assert coerce("date", "someday") == {"default": None}
        assert "not a valid date" in capsys.readouterr().err

    def test_parse_and_format_helpers(self):
        moment = parse_timestamp("2015-11-01T10:20:30Z")
        assert moment is not None
        assert format_timestamp(moment) == "2015-11-01T10:20:30.000Z"


class TestCoerceGeopoint:
    def test_pair_of_numbers(self):
        assert coerce("geopoint", "55.5, 44.4") == {"default": {"lat": 55.5, "lng": 44.4}}

    def test_json_and_pair_forms_agree(self):
        assert coerce("geopoint", '{"lat":55.5,"lng":44.4}') == coerce("geopoint", "55.5, 44.4")

    def test_malformed_json_with_key_names_falls_back_to_split(self):
        """Text mentioning lat and lng that is not JSON is split, never raised."""
        assert coerce("geopoint", "lat 55.5, lng 44.4") == {"default": {"lat": None, "lng": 55.5}}

    def test_json_missing_a_key_falls_back_to_split(self):
        assert coerce("geopoint", '{"lat": 1, "lngx": 2}') == {"default": {"lat": None, "lng": 1}}


class TestCoerceBufferAndAny:
    def test_buffer_is_utf8_bytes(self, capsys):
        assert coerce("buffer", "héllo") == {"default": "héllo".encode("utf-8")}
        assert "UTF8" in capsys.readouterr().err

    def test_any_is_stored_verbatim(self, capsys):
        assert coerce("any", "[1, 2]") == {"default": "[1, 2]"}
        assert "stored as string" in capsys.readouterr().err


class TestUnsupportedType:
    def test_unknown_type_fails(self):
        with pytest.raises(UnsupportedPropertyTypeError, match="Unsupported model property type: unknown"):
            coerce("unknown", "x")

    def test_type_match_is_case_sensitive(self):
        with pytest.raises(UnsupportedPropertyTypeError):
            coerce("String", "x")


class TestCoerceDefault:
    """coerce_default() applies the result to a PropertyDefinition."""

    def test_sets_literal_default(self):
        definition = PropertyDefinition(name="age", type="number", required=True)
        result = coerce_default(definition, "7")
        assert result.to_schema_entry() == {"type": "number", "required": True, "default": 7}

    def test_sets_default_fn(self):
        definition = PropertyDefinition(name="created", type="date")
        result = coerce_default(definition, "now")
        assert result.default_fn == "now"
        assert not result.has_default

    @pytest.mark.parametrize(
        ("prop_type", "value"),
        [
            ("string", "uuid"),
            ("string", "x"),
            ("number", "1"),
            ("boolean", "t"),
            ("array", "a,b"),
            ("date", "now"),
            ("date", "2015-11"),
            ("geopoint", "1 2"),
            ("any", "z"),
            ("buffer", "x"),
            ("object", '{"a": 1}'),
        ],
    )
    def test_never_both_default_and_default_fn(self, prop_type: str, value: str):
        entry = coerce_default(PropertyDefinition(name="p", type=prop_type), value).to_schema_entry()
        assert not ("default" in entry and "defaultFn" in entry)
