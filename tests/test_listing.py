"""Unit tests for search, int coercion and pagination helpers."""

import math

import pytest

from field_ops_api.app.services.listing import apply_search, coerce_int, matches_search, paginate


@pytest.mark.parametrize(
    "value, expected",
    [
        ("3", 3),
        (" 7 ", 7),
        (5, 5),
        ("abc", None),
        ("", None),
        ("0", None),
        ("-2", None),
        ("2.5", None),
        (None, None),
    ],
)
def test_coerce_int(value, expected):
    assert coerce_int(value) == expected


def test_coerce_int_default():
    assert coerce_int("nope", 10) == 10
    assert coerce_int("4", 10) == 4


def test_coerce_int_minimum():
    assert coerce_int("0", 30, minimum=0) == 0
    assert coerce_int("-1", 30, minimum=0) == 30
    assert coerce_int("0", 30) == 30


class TestSearch:
    records = [
        {"name": "POP Central", "code": "POP-001", "address": "São Paulo"},
        {"name": "POP Norte", "code": "POP-002", "address": None},
    ]

    def test_matches_any_field(self):
        assert matches_search(self.records[0], ("name", "address"), "são")
        assert matches_search(self.records[0], ("name", "address"), "CENTRAL")
        assert not matches_search(self.records[1], ("name", "address"), "são")

    def test_non_ascii_case_folding(self):
        assert matches_search(self.records[0], ("address",), "SÃO PAULO")

    def test_apply_search_without_term_returns_everything(self):
        assert apply_search(self.records, ("name",), None) == self.records
        assert apply_search(self.records, ("name",), "") == self.records

    def test_apply_search(self):
        assert apply_search(self.records, ("code",), "002") == [self.records[1]]


class TestPaginate:
    @pytest.mark.parametrize("total, limit", [(0, 10), (1, 10), (10, 10), (11, 10), (7, 3), (25, 1)])
    def test_page_count_and_size(self, total, limit):
        items = list(range(total))

        for page in range(1, max(1, math.ceil(total / limit)) + 1):
            result = paginate(items, page, limit)
            assert result["total_paginas"] == math.ceil(total / limit)
            assert len(result["dados"]) <= limit

    def test_pages_cover_items_in_order(self):
        items = list(range(7))

        pages = [paginate(items, page, 3)["dados"] for page in (1, 2, 3)]

        assert pages == [[0, 1, 2], [3, 4, 5], [6]]

    def test_page_past_the_end_is_empty(self):
        result = paginate([1, 2], 5, 10)

        assert result["dados"] == []
        assert result["pagina"] == 5

    def test_defaults(self):
        result = paginate(list(range(30)))

        assert result["pagina"] == 1
        assert result["limite"] == 10
        assert result["dados"] == list(range(10))
