"""
Tests for the offset pagination models and the response envelope.
"""

from pydantic import BaseModel

from services.common.pagination import PagedData, PageRequest
from services.common.responses import ApiResponse


class Item(BaseModel):
    value: int


class TestPageRequest:
    def test_offset(self):
        assert PageRequest(page_number=1, page_size=10).offset == 0
        assert PageRequest(page_number=3, page_size=25).offset == 50

    def test_valid_page_has_no_reasons(self):
        assert PageRequest(page_number=1, page_size=1).invalid_reasons() == []

    def test_page_number_below_one(self):
        reasons = PageRequest(page_number=0, page_size=10).invalid_reasons()

        assert reasons == [
            ("Invalid page number", "Page number must be greater than or equal to 1.")
        ]

    def test_page_size_not_positive(self):
        reasons = PageRequest(page_number=1, page_size=-5).invalid_reasons()

        assert reasons == [("Invalid page size", "Page size must be greater than 0.")]

    def test_page_number_reported_first(self):
        reasons = PageRequest(page_number=0, page_size=0).invalid_reasons()

        assert [message for message, _ in reasons] == [
            "Invalid page number",
            "Invalid page size",
        ]


class TestPagedData:
    def test_empty_echoes_request(self):
        page = PagedData[Item].empty(PageRequest(page_number=4, page_size=20))

        assert page.model_dump(by_alias=True) == {
            "totalCount": 0,
            "currentPageDataCount": 0,
            "pageNumber": 4,
            "pageSize": 20,
            "data": [],
        }

    def test_from_page_counts_items(self):
        items = [Item(value=1), Item(value=2)]

        page = PagedData[Item].from_page(
            items, total_count=12, page=PageRequest(page_number=2, page_size=10)
        )

        assert page.total_count == 12
        assert page.current_page_data_count == 2
        assert page.page_number == 2
        assert page.data == items


class TestApiResponse:
    def test_ok(self):
        response = ApiResponse[Item].ok(Item(value=3), "Fine")

        assert response.model_dump(by_alias=True) == {
            "statusCode": 200,
            "success": True,
            "message": "Fine",
            "data": {"value": 3},
            "errors": None,
        }

    def test_fail(self):
        response = ApiResponse[Item].fail("Nope", ["reason"], status_code=409)

        assert response.status_code == 409
        assert response.success is False
        assert response.data is None
        assert response.errors == ["reason"]
