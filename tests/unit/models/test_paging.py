"""Tests for paging requests, offset correction and paginators."""

from __future__ import annotations

import pytest

from capsearch.models.paging import Paginator, PagingRequest, correct_offset
from capsearch.models.result import SearchResult

# ── Offset correction ────────────────────────────────────────────────────────


class TestCorrectOffset:
    @pytest.mark.parametrize("offset", [None, 0, -1, -50])
    def test_missing_or_non_positive_maps_to_zero(self, offset: int | None) -> None:
        assert correct_offset(offset) == 0

    def test_one_based_to_zero_based(self) -> None:
        assert correct_offset(1) == 0
        assert correct_offset(11) == 10


# ── PagingRequest ────────────────────────────────────────────────────────────


class TestPagingRequest:
    def test_usable_requires_positive_page_size(self) -> None:
        assert PagingRequest(page_size=10).is_usable
        assert not PagingRequest(page_size=0, offset=5).is_usable
        assert not PagingRequest(page_size=-3).is_usable
        assert not PagingRequest(offset=5).is_usable


# ── Paginator ────────────────────────────────────────────────────────────────


class TestPaginator:
    def test_from_paging_request_corrects_offset_once(self) -> None:
        paginator = Paginator.from_paging_request(PagingRequest(page_size=10, offset=21))
        assert paginator.page_size == 10
        assert paginator.offset == 20
        assert paginator.no_more_results is False
        assert paginator.token is None

    def test_default_when_no_request(self) -> None:
        paginator = Paginator.for_request_or_default(None, 20)
        assert paginator.page_size == 20
        assert paginator.offset == 0

    def test_offset_only_request_is_treated_as_absent(self) -> None:
        paginator = Paginator.for_request_or_default(PagingRequest(offset=21), 20)
        assert paginator.page_size == 20
        assert paginator.offset == 0

    def test_non_positive_page_size_is_treated_as_absent(self) -> None:
        paginator = Paginator.for_request_or_default(PagingRequest(page_size=0, offset=21), 20)
        assert paginator.page_size == 20
        assert paginator.offset == 0

    def test_request_wins_over_default(self) -> None:
        paginator = Paginator.for_request_or_default(PagingRequest(page_size=5, offset=6), 20)
        assert paginator.page_size == 5
        assert paginator.offset == 5

    def test_unbounded(self) -> None:
        paginator = Paginator.unbounded()
        assert not paginator.has_pagination
        assert paginator.window_end() is None
        assert str(paginator) == "none"

    def test_window_end(self) -> None:
        assert Paginator(page_size=10, offset=20).window_end() == 30

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(ValueError):
            Paginator(page_size=10, offset=-1)

    def test_str(self) -> None:
        assert str(Paginator(page_size=10, offset=5)) == "[size:10,offset:5,done=false]"


class TestSearchResult:
    def test_defaults_signal_completion(self) -> None:
        result = SearchResult()
        assert result.token is None
        assert result.no_more_results is True

    def test_from_paginator(self) -> None:
        paginator = Paginator(page_size=10, token="abc", no_more_results=False)
        result = SearchResult.from_paginator(paginator)
        assert result.token == "abc"
        assert result.no_more_results is False
