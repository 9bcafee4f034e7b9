"""
Pagination schemas and data models.

Offset (page number / page size) pagination shared by list endpoints.
"""

from typing import Generic, List, Tuple, TypeVar

from pydantic import Field

from services.common.responses import CamelModel

T = TypeVar("T")


class PageRequest(CamelModel):
    """Requested page, 1-based."""

    page_number: int = Field(1, description="1-based page number")
    page_size: int = Field(10, description="Number of items per page")

    @property
    def offset(self) -> int:
        """Number of items to skip before this page starts."""
        return (self.page_number - 1) * self.page_size

    def invalid_reasons(self) -> List[Tuple[str, str]]:
        """Return (message, error) pairs for each out-of-range parameter."""
        reasons = []
        if self.page_number < 1:
            reasons.append(
                ("Invalid page number", "Page number must be greater than or equal to 1.")
            )
        if self.page_size <= 0:
            reasons.append(("Invalid page size", "Page size must be greater than 0."))
        return reasons


class PagedData(CamelModel, Generic[T]):
    """One page of results plus the counts needed to request further pages."""

    total_count: int = Field(..., description="Total number of matching items")
    current_page_data_count: int = Field(
        ..., description="Number of items in the current page"
    )
    page_number: int = Field(..., description="Requested page number")
    page_size: int = Field(..., description="Requested page size")
    data: List[T] = Field(default_factory=list, description="Items in this page")

    @classmethod
    def empty(cls, page: PageRequest) -> "PagedData[T]":
        return cls(
            total_count=0,
            current_page_data_count=0,
            page_number=page.page_number,
            page_size=page.page_size,
            data=[],
        )

    @classmethod
    def from_page(
        cls, items: List[T], total_count: int, page: PageRequest
    ) -> "PagedData[T]":
        return cls(
            total_count=total_count,
            current_page_data_count=len(items),
            page_number=page.page_number,
            page_size=page.page_size,
            data=items,
        )
