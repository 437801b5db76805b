"""Tests for noty.properties.flatten_properties."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from noty.properties import flatten_properties


class TestScalarMapping:
    def test_name_becomes_title(self):
        assert flatten_properties({"Name": "My Page"}) == {
            "Name": {"title": [{"text": {"content": "My Page"}}]}
        }

    def test_other_string_becomes_rich_text(self):
        assert flatten_properties({"Notes": "hi"}) == {
            "Notes": {"rich_text": [{"text": {"content": "hi"}}]}
        }

    def test_list_becomes_multi_select(self):
        assert flatten_properties({"Tags": ["a", 2]}) == {
            "Tags": {"multi_select": [{"name": "a"}, {"name": "2"}]}
        }

    def test_tuple_becomes_multi_select(self):
        assert flatten_properties({"Tags": ("x",)}) == {
            "Tags": {"multi_select": [{"name": "x"}]}
        }

    def test_bool_is_checkbox_not_number(self):
        assert flatten_properties({"Done": True}) == {"Done": {"checkbox": True}}
        assert flatten_properties({"Done": False}) == {"Done": {"checkbox": False}}

    def test_numbers(self):
        assert flatten_properties({"Count": 3, "Ratio": 0.5}) == {
            "Count": {"number": 3},
            "Ratio": {"number": 0.5},
        }

    def test_none_dropped(self):
        assert flatten_properties({"Gone": None, "Kept": 1}) == {"Kept": {"number": 1}}

    def test_mapping_passes_through(self):
        payload = {"select": {"name": "High"}}
        assert flatten_properties({"Priority": payload}) == {"Priority": payload}

    def test_name_non_string_not_title(self):
        assert flatten_properties({"Name": 5}) == {"Name": {"number": 5}}

    def test_empty(self):
        assert flatten_properties({}) == {}


class TestDateShorthand:
    def test_start_and_end_merge(self):
        result = flatten_properties({
            "date:Due:start": "2026-01-01",
            "date:Due:end": "2026-01-05",
        })
        assert result == {"Due": {"date": {"start": "2026-01-01", "end": "2026-01-05"}}}

    def test_is_datetime_accumulated_but_not_emitted(self):
        result = flatten_properties({
            "date:Due:start": "2026-01-01T10:00:00Z",
            "date:Due:is_datetime": "yes",
        })
        assert result == {"Due": {"date": {"start": "2026-01-01T10:00:00Z"}}}

    def test_start_is_stringified(self):
        assert flatten_properties({"date:When:start": 20260101}) == {
            "When": {"date": {"start": "20260101"}}
        }

    def test_dates_emitted_after_other_keys(self):
        result = flatten_properties({
            "date:Due:start": "2026-01-01",
            "Count": 1,
        })
        assert list(result) == ["Count", "Due"]

    def test_unknown_suffix_ignored(self):
        assert flatten_properties({"date:Due:timezone": "UTC"}) == {"Due": {"date": {}}}

    def test_two_date_groups(self):
        result = flatten_properties({
            "date:A:start": "2026-01-01",
            "date:B:start": "2026-02-01",
        })
        assert result == {
            "A": {"date": {"start": "2026-01-01"}},
            "B": {"date": {"start": "2026-02-01"}},
        }


_names = st.text(min_size=1, max_size=12).filter(
    lambda k: k != "Name" and not k.startswith("date:")
)
_scalars = st.one_of(
    st.text(max_size=20),
    st.integers(),
    st.floats(allow_nan=False),
    st.booleans(),
    st.lists(st.text(max_size=8), max_size=4),
)


class TestFlattenProperties:
    @given(st.dictionaries(_names, _scalars, max_size=8))
    def test_one_output_per_input(self, values):
        result = flatten_properties(values)
        assert list(result) == list(values)
        for key, value in values.items():
            out = result[key]
            if isinstance(value, bool):
                assert out == {"checkbox": value}
            elif isinstance(value, (int, float)):
                assert out == {"number": value}
            elif isinstance(value, str):
                assert out == {"rich_text": [{"text": {"content": value}}]}
            else:
                assert out == {"multi_select": [{"name": v} for v in value]}
