"""
Pagination and sort normalization for list endpoints.

Query parameters are sanitized here before any query is built:
- page is clamped into [0, MAX_PAGE] and size into [1, MAX_PAGE_SIZE]
- direction must be "asc" or "desc" (any case)
- sortBy must name a member of a closed SortField enum, which maps to a column
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BadRequestError
from app.models import Project, Task

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
# Largest page whose row offset still fits a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE
DEFAULT_SORT_BY = "createdAt"
DEFAULT_DIRECTION = "desc"

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    """Base for per-resource sort keys. Values are the wire names."""

    @property
    def column(self) -> Any:
        raise NotImplementedError

    @property
    def tiebreaker(self) -> Any:
        """Unique column that keeps page boundaries stable when sort values tie."""
        raise NotImplementedError


class ProjectSortField(SortField):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    DUE_DATE = "dueDate"
    NAME = "name"
    STATUS = "status"

    @property
    def column(self) -> Any:
        return {
            ProjectSortField.CREATED_AT: Project.created_at,
            ProjectSortField.UPDATED_AT: Project.updated_at,
            ProjectSortField.DUE_DATE: Project.due_date,
            ProjectSortField.NAME: Project.name,
            ProjectSortField.STATUS: Project.status,
        }[self]

    @property
    def tiebreaker(self) -> Any:
        return Project.id


class TaskSortField(SortField):
    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"

    @property
    def column(self) -> Any:
        return {
            TaskSortField.CREATED_AT: Task.created_at,
            TaskSortField.DUE_DATE: Task.due_date,
            TaskSortField.TITLE: Task.title,
            TaskSortField.STATUS: Task.status,
            TaskSortField.PRIORITY: Task.priority,
        }[self]

    @property
    def tiebreaker(self) -> Any:
        return Task.id


@dataclass(frozen=True)
class PageRequest:
    """A validated page/sort request."""
    page: int
    size: int
    sort_field: SortField
    direction: SortDirection

    @property
    def offset(self) -> int:
        return self.page * self.size

    def order_by(self) -> tuple[Any, ...]:
        column = self.sort_field.column
        primary = column.asc() if self.direction is SortDirection.ASC else column.desc()
        return primary, self.sort_field.tiebreaker.asc()


@dataclass
class Page(Generic[T]):
    """One page of query results plus the total row count."""
    content: Sequence[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages


def parse_direction(direction: str | None) -> SortDirection:
    try:
        return SortDirection((direction or "").strip().lower())
    except ValueError:
        raise BadRequestError("direction must be asc or desc") from None


def parse_sort_field(sort_by: str | None, sort_fields: type[SortField]) -> SortField:
    try:
        return sort_fields(sort_by)
    except ValueError:
        allowed = ", ".join(field.value for field in sort_fields)
        raise BadRequestError(f"Invalid sortBy. Allowed: {allowed}") from None


def normalize_page_request(
    page: int,
    size: int,
    sort_by: str | None,
    direction: str | None,
    sort_fields: type[SortField],
) -> PageRequest:
    """
    Build a PageRequest from raw query parameters.

    page and size are never rejected, only clamped. An unknown direction or
    sort field raises BadRequestError.
    """
    return PageRequest(
        page=min(max(page, 0), MAX_PAGE),
        size=min(max(size, 1), MAX_PAGE_SIZE),
        sort_field=parse_sort_field(sort_by, sort_fields),
        direction=parse_direction(direction),
    )


async def fetch_page(
    session: AsyncSession,
    statement: Any,
    request: PageRequest,
    options: Sequence[Any] = (),
) -> Page:
    """
    Run `statement` (a filtered select of one entity) for one page.

    The total count is taken over the same filters, ignoring paging. Loader
    `options` apply to the page query only.
    """
    count_query = select(func.count()).select_from(statement.order_by(None).subquery())
    total = (await session.execute(count_query)).scalar_one()

    paged = statement.options(*options).order_by(*request.order_by()).offset(request.offset).limit(request.size)
    result = await session.execute(paged)
    return Page(
        content=list(result.scalars().all()),
        page=request.page,
        size=request.size,
        total_elements=total,
    )
