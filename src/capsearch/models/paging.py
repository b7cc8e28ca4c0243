"""Paging models — Caller paging requests and per-search paginator state.

Callers express paging with a 1-based offset. Connectors and the local
slicing helpers work with a 0-based offset. The conversion happens exactly
once, when a ``Paginator`` is built from a ``PagingRequest``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PagingRequest(BaseModel):
    """Paging window requested by the caller (1-based offset)."""

    page_size: int | None = Field(default=None, description="Maximum number of records per page")
    offset: int | None = Field(default=None, description="1-based index of the first record of the page")

    @property
    def is_usable(self) -> bool:
        """A request without a positive page size is treated as absent."""
        return self.page_size is not None and self.page_size > 0


def correct_offset(offset: int | None) -> int:
    """Convert a 1-based caller offset to a 0-based offset.

    Offsets that are missing, zero or negative all map to 0.
    """
    if offset is None or offset <= 0:
        return 0
    return offset - 1


class Paginator(BaseModel):
    """Mutable paging state threaded through a single search call.

    Connectors read ``page_size`` and ``offset`` and report back by setting
    ``no_more_results`` (and optionally ``token`` / ``total_results``).
    A ``page_size`` of ``None`` means the listing is unbounded.

    Paginators are created fresh for every search and must never be shared
    between concurrent searches.
    """

    page_size: int | None = Field(default=None, description="Records per page; None means unbounded")
    offset: int = Field(default=0, ge=0, description="0-based index of the first record")
    token: str | None = Field(default=None, description="Backend continuation token, if any")
    no_more_results: bool = Field(default=False, description="Set once the backend has nothing further")
    total_results: int | None = Field(default=None, description="Total matching records, when known")

    @classmethod
    def from_paging_request(cls, request: PagingRequest) -> Paginator:
        """Build a paginator from a caller request, correcting the offset."""
        return cls(page_size=request.page_size, offset=correct_offset(request.offset))

    @classmethod
    def for_request_or_default(cls, request: PagingRequest | None, default_page_size: int) -> Paginator:
        """Use the caller's window when usable, else ``default_page_size``.

        An unusable request (no positive page size) is treated as absent,
        offset included.
        """
        if request is not None and request.is_usable:
            return cls.from_paging_request(request)
        return cls(page_size=default_page_size)

    @classmethod
    def unbounded(cls) -> Paginator:
        return cls()

    @property
    def has_pagination(self) -> bool:
        return self.page_size is not None

    def window_end(self) -> int | None:
        """Exclusive end index of the current window, or None if unbounded."""
        if self.page_size is None:
            return None
        return self.offset + self.page_size

    def __str__(self) -> str:
        if not self.has_pagination:
            return "none"
        return f"[size:{self.page_size},offset:{self.offset},done={str(self.no_more_results).lower()}]"
