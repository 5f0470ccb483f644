from __future__ import annotations

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Pagination block echoed back by list endpoints."""

    page: int = Field(description="Current page (1-based)")
    page_size: int = Field(description="Requested page size")
    # Number of rows on this page, not the size of the whole collection.
    total: int = Field(description="Number of items returned")
