import pytest
from pydantic import ValidationError

from src.tracker.domain.models import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    PageRequest,
    SortDirection,
    SortOrder,
    TaskPage,
)


def test_page_request_defaults() -> None:
    request = PageRequest()

    assert request.page == 0
    assert request.size == 20
    assert request.sort == []
    assert request.offset == 0


def test_page_request_offset() -> None:
    assert PageRequest(page=3, size=25).offset == 75


def test_largest_page_offset_fits_signed_64_bit() -> None:
    assert PageRequest(page=MAX_PAGE, size=MAX_PAGE_SIZE).offset <= 2**63 - 1


@pytest.mark.parametrize(
    "fields",
    [
        {"page": -1},
        {"size": 0},
        {"size": MAX_PAGE_SIZE + 1},
        {"page": MAX_PAGE + 1},
        {"page": 10**18, "size": 20},
    ],
)
def test_page_request_rejects_out_of_range_values(fields: dict) -> None:
    with pytest.raises(ValidationError):
        PageRequest(**fields)


def test_sort_order_helpers() -> None:
    assert SortOrder.asc("title") == SortOrder(attribute="title", direction=SortDirection.ASC)
    assert SortOrder.desc("title").direction is SortDirection.DESC
    assert SortOrder(attribute="status").direction is SortDirection.ASC


def test_sort_order_accepts_direction_strings() -> None:
    assert SortOrder.model_validate({"attribute": "id", "direction": "desc"}).direction is SortDirection.DESC


@pytest.mark.parametrize(
    ("page", "size", "total", "total_pages", "has_next"),
    [
        (0, 10, 0, 0, False),
        (0, 10, 10, 1, False),
        (0, 10, 11, 2, True),
        (1, 10, 11, 2, False),
        (4, 3, 20, 7, True),
    ],
)
def test_task_page_totals(
    page: int, size: int, total: int, total_pages: int, has_next: bool
) -> None:
    result = TaskPage(page=page, size=size, total=total)

    assert result.total_pages == total_pages
    assert result.has_next is has_next
