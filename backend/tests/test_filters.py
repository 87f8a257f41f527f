"""
Rentomatic Backend - Filter Grammar Unit Tests
===============================================

What:  Tests for filter key parsing, value coercion and condition matching.
Why:   Both repositories rely on this grammar; a bug here breaks backend
       substitutability.
"""

import pytest

from rentomatic.domain.filters import (
    EQ,
    INT4_MAX,
    INT4_MIN,
    MAX,
    MIN,
    FilterCondition,
    UnknownFilterError,
    coerce_filter_value,
    parse_filter_key,
    parse_filters,
)


class TestParseFilterKey:

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("code", ("code", EQ)),
            ("price", ("price", EQ)),
            ("price_min", ("price", MIN)),
            ("price_max", ("price", MAX)),
            ("size_min", ("size", MIN)),
            ("latitude_max", ("latitude", MAX)),
            ("longitude", ("longitude", EQ)),
        ],
    )
    def test_known_keys(self, key, expected):
        assert parse_filter_key(key) == expected

    @pytest.mark.parametrize("key", ["colour", "price_lt", "code_min", "code_max", "", "_min"])
    def test_unknown_keys(self, key):
        with pytest.raises(UnknownFilterError, match="cannot be used"):
            parse_filter_key(key)

    def test_unknown_filter_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_filter_key("colour")


class TestCoerceFilterValue:

    def test_integer_fields_accept_numeric_strings(self):
        assert coerce_filter_value("price", "40") == 40
        assert coerce_filter_value("size", " 200 ") == 200

    def test_integer_fields_accept_whole_floats(self):
        assert coerce_filter_value("price", 40.0) == 40

    @pytest.mark.parametrize("value", ["abc", "4.5", 4.5, "", True, None, [1]])
    def test_integer_fields_reject_other_values(self, value):
        with pytest.raises((TypeError, ValueError)):
            coerce_filter_value("price", value)

    def test_float_fields(self):
        assert coerce_filter_value("latitude", "51.5") == 51.5
        assert coerce_filter_value("longitude", 1) == 1.0

    def test_float_fields_reject_text(self):
        with pytest.raises(ValueError):
            coerce_filter_value("latitude", "north")

    @pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("nan"), "1e400"])
    def test_float_fields_reject_non_finite_values(self, value):
        with pytest.raises(ValueError):
            coerce_filter_value("longitude", value)

    @pytest.mark.parametrize("value", [INT4_MAX + 1, INT4_MIN - 1, "100000000000000000000"])
    def test_integer_fields_stay_in_column_range(self, value):
        with pytest.raises(ValueError):
            coerce_filter_value("price", value)

    def test_integer_range_limits_are_accepted(self):
        assert coerce_filter_value("size", INT4_MAX) == INT4_MAX
        assert coerce_filter_value("size", str(INT4_MIN)) == INT4_MIN

    def test_code_must_be_text(self):
        assert coerce_filter_value("code", "abc") == "abc"
        with pytest.raises(TypeError):
            coerce_filter_value("code", 123)


class TestParseFilters:

    def test_no_filters(self):
        assert parse_filters(None) == []
        assert parse_filters({}) == []

    def test_values_are_coerced(self):
        conditions = parse_filters({"price_min": "40", "code": "abc"})

        assert conditions == [
            FilterCondition("price", MIN, 40),
            FilterCondition("code", EQ, "abc"),
        ]

    def test_unknown_key_raises(self):
        with pytest.raises(UnknownFilterError):
            parse_filters({"colour": "red"})


class TestFilterConditionMatches:

    def test_bounds_are_inclusive(self, domain_rooms):
        room = domain_rooms[0]  # price 39

        assert FilterCondition("price", MIN, 39).matches(room)
        assert FilterCondition("price", MAX, 39).matches(room)
        assert not FilterCondition("price", MIN, 40).matches(room)
        assert not FilterCondition("price", MAX, 38).matches(room)

    def test_equality(self, domain_rooms):
        room = domain_rooms[0]

        assert FilterCondition("code", EQ, room.code).matches(room)
        assert not FilterCondition("code", EQ, "other").matches(room)

    def test_null_matches_nothing(self, domain_rooms):
        room = domain_rooms[0].model_copy(update={"price": None})

        for operator in (EQ, MIN, MAX):
            assert not FilterCondition("price", operator, 0).matches(room)
