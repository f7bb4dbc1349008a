"""Test aggregation helpers."""

import pytest

from serpstat_mcp.data.aggregation import (
    average,
    average_int,
    bucket_counts,
    column_average,
    column_sum,
    count_where,
    frequency,
    list_values,
    numeric,
    optional_number,
    pagination,
    percentage,
    position_tiers,
    round_half_up,
    to_frame,
    top_n,
)


def test_round_half_up():
    assert round_half_up(75.375) == 75.38
    assert round_half_up(0.125) == 0.13
    assert round_half_up(150.75) == 150.75
    assert round_half_up(0) == 0


def test_percentage():
    assert percentage(1, 2) == 50.0
    assert percentage(1, 3) == 33.33
    assert percentage(2, 3) == 66.67
    assert percentage(5, 0) == 0.0


def test_averages():
    assert average(150.75, 2) == 75.38
    assert average(10, 0) == 0.0
    assert average_int(7, 2) == 4
    assert average_int(5, 0) == 0


def test_to_frame_skips_non_objects():
    frame = to_frame([{"a": 1}, "junk", None, {"a": 2}])
    assert len(frame) == 2
    assert to_frame([]).empty
    with pytest.raises(TypeError):
        to_frame({"a": 1})


def test_numeric_drops_missing_and_malformed_cells():
    frame = to_frame([{"x": 1}, {"x": True}, {"x": "abc"}, {"x": None}, {"y": 3}, {"x": "2.5"}])
    assert list(numeric(frame, "x")) == [1.0, 2.5]
    assert numeric(frame, "missing").empty


def test_sums_and_averages_skip_missing_fields():
    frame = to_frame([{"cost": 1.5}, {"cost": 2.5}, {}])
    assert column_sum(frame, "cost") == 4.0
    # Average over entries that carry the field
    assert column_average(frame, "cost") == 2.0
    assert count_where(frame, "cost", lambda v: v > 2) == 1
    assert count_where(to_frame([]), "cost", lambda v: v > 2) == 0


def test_frequency_keeps_first_seen_order():
    counts = frequency(["b", "a", "b", "c", "a", "b"])
    assert list(counts.items()) == [("b", 3), ("a", 2), ("c", 1)]
    assert frequency([]) == {}


def test_top_n_is_stable_on_ties():
    counts = {"a": 2, "b": 3, "c": 2, "d": 1}
    assert list(top_n(counts, 3)) == ["b", "a", "c"]
    assert top_n({}) == {}


def test_list_values_flattens_arrays():
    frame = to_frame([
        {"types": ["ads", "video"]},
        {"types": []},
        {"types": ["ads", ""]},
        {"types": "ads"},
        {},
    ])
    assert list(list_values(frame, "types")) == ["ads", "video", "ads"]
    assert frequency(list_values(frame, "types")) == {"ads": 2, "video": 1}


def test_bucket_counts_sum_to_entries_with_value():
    frame = to_frame([{"keyword_length": 2}, {"keyword_length": 3}, {"keyword_length": 2}, {}])
    buckets = bucket_counts(frame, "keyword_length", "{}_words")
    assert buckets == {"2_words": 2, "3_words": 1}
    assert sum(buckets.values()) == 3


def test_position_tiers():
    frame = to_frame([{"position": 3}, {"position": 15}])
    tiers = position_tiers(frame)
    assert tiers == {
        "top_3": 1,
        "first_page": 1,
        "second_page": 1,
        "beyond_second_page": 0,
        "ranked": 2,
    }


def test_position_tiers_top_is_subset_of_first_page():
    frame = to_frame([{"position": p} for p in (1, 2, 3, 4, 10, 11, 20, 21, 99)])
    tiers = position_tiers(frame)
    assert tiers["top_3"] == 3
    assert tiers["first_page"] == 5
    assert tiers["second_page"] == 2
    assert tiers["beyond_second_page"] == 2
    assert tiers["top_3"] <= tiers["first_page"] <= tiers["ranked"]


def test_pagination():
    assert pagination(250, 1, 100, 100) == {
        "total_pages": 3,
        "has_next_page": True,
        "credits_used_this_request": 100,
    }
    assert pagination(250, 3, 100, 50)["has_next_page"] is False
    assert pagination(None, 1, 100, 0) == {"credits_used_this_request": 1}


def test_optional_number():
    assert optional_number(3) == 3.0
    assert optional_number("2") == 2.0
    assert optional_number("abc") is None
    assert optional_number(None) is None
    assert optional_number(True) is None
    assert optional_number(float("inf")) is None
