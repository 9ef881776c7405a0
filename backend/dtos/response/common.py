"""
Shared Response DTOs
"""

from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from services.results import PageResult

T = TypeVar('T')

# Decimal internally, JSON number on the wire; MAX_AMOUNT keeps every amount
# within the digits a float reproduces exactly
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CreatedResponse(BaseModel):
    """Identifier of a newly created resource."""

    id: UUID = Field(description="New resource ID")


class PageResponse(BaseModel, Generic[T]):
    """
    Response DTO for one page of a list.
    """

    items: List[T] = Field(description="Items on this page")
    total: int = Field(description="Total number of matching items")
    page: int = Field(description="1-based page number")
    page_size: int = Field(description="Requested page size")
    total_pages: int = Field(description="Number of pages")
    has_next: bool = Field(description="Whether a later page exists")
    has_previous: bool = Field(description="Whether an earlier page exists")

    @classmethod
    def from_page(cls, page: PageResult) -> "PageResponse":
        return cls(
            items=page.items,
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )
