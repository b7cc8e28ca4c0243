"""Search result model — What a search call reports once its batches are emitted."""

from __future__ import annotations

from pydantic import BaseModel, Field

from capsearch.models.paging import Paginator


class SearchResult(BaseModel):
    """Continuation state of a completed search call.

    Records themselves are delivered to the result sink; this only tells
    the caller whether (and how) to ask for the next page.
    """

    token: str | None = Field(default=None, description="Continuation token for the next page")
    no_more_results: bool = Field(default=True, description="True when no further page exists")

    @classmethod
    def from_paginator(cls, paginator: Paginator) -> SearchResult:
        return cls(token=paginator.token, no_more_results=paginator.no_more_results)
