from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, Field

from src.tracker.domain.models.task import Task

MAX_PAGE_SIZE = 1000
# Keeps page * size inside a signed 64-bit OFFSET for any allowed size.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    attribute: str = Field(description="Task attribute to order by.")
    direction: SortDirection = Field(default=SortDirection.ASC)

    @classmethod
    def asc(cls, attribute: str) -> SortOrder:
        return cls(attribute=attribute, direction=SortDirection.ASC)

    @classmethod
    def desc(cls, attribute: str) -> SortOrder:
        return cls(attribute=attribute, direction=SortDirection.DESC)


class PageRequest(BaseModel):
    """Zero-based page selection with optional ordering."""

    page: int = Field(default=0, ge=0, le=MAX_PAGE, description="Zero-based page number.")
    size: int = Field(default=20, ge=1, le=MAX_PAGE_SIZE, description="Page size.")
    sort: list[SortOrder] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


class TaskPage(BaseModel):
    """One slice of a paged task listing plus the totals needed to walk it."""

    items: list[Task] = Field(default_factory=list)
    page: int = Field(description="Zero-based page number of this slice.")
    size: int = Field(description="Requested page size.")
    total: int = Field(description="Number of matching tasks across all pages.")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
