"""Tests for sort column/direction whitelisting."""

import pytest

from ficarchive.domain.navigation.sorting import (
    SortKind,
    set_sort_order,
    valid_sort_column,
    valid_sort_direction,
)


class TestValidSortColumn:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("word_count", "work"),
            ("WORD_COUNT", "work"),
            ("uses", "tag"),
            ("collections.title", "collection"),
            ("prompter", "prompt"),
            ("claimer", SortKind.CLAIM),
            ("created_at", "Claim"),
        ],
    )
    def test_whitelisted(self, value: str, kind: str):
        assert valid_sort_column(value, kind)

    @pytest.mark.parametrize("value", ["password", "", "   ", None, "id; DROP TABLE works"])
    def test_rejected(self, value: str | None):
        assert not valid_sort_column(value)

    def test_defaults_to_work_kind(self):
        assert valid_sort_column("hit_count")
        assert not valid_sort_column("claimer")

    def test_unknown_kind_allows_nothing(self):
        assert not valid_sort_column("created_at", "bookmark")


class TestValidSortDirection:
    def test_case_insensitive(self):
        assert valid_sort_direction("asc")
        assert valid_sort_direction("DESC")
        assert not valid_sort_direction("sideways")
        assert not valid_sort_direction(None)


class TestSetSortOrder:
    def test_valid_input(self):
        assert set_sort_order("fandom", "asc").order == "fandom ASC"

    def test_column_is_normalised(self):
        assert set_sort_order("Created_At", "desc").order == "created_at DESC"

    def test_invalid_input_falls_back_to_id_desc(self):
        assert set_sort_order("password", "sideways").order == "id DESC"
        assert set_sort_order(None, None).order == "id DESC"

    def test_each_part_falls_back_independently(self):
        assert set_sort_order("fandom", "sideways").order == "fandom DESC"
        assert set_sort_order("word_count", "asc").order == "id ASC"

    def test_kind_selects_whitelist(self):
        spec = set_sort_order("word_count", "asc", kind=SortKind.WORK)

        assert spec.order == "word_count ASC"
        assert spec.kind == "work"
