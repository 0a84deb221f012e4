from src.tracker.domain.models.paging import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    PageRequest,
    SortDirection,
    SortOrder,
    TaskPage,
)
from src.tracker.domain.models.task import Task

__all__ = [
    "Task",
    "TaskPage",
    "PageRequest",
    "SortOrder",
    "SortDirection",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
]
