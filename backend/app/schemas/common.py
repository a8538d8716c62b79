from datetime import datetime
from typing import Annotated, Callable, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.base import as_utc
from app.services.pagination import Page

T = TypeVar("T")

# SQLite hands timestamps back without an offset; they are always UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    """Request body. Unknown keys are rejected rather than silently dropped."""
    model_config = ConfigDict(extra="forbid")


class PagedResponse(ApiModel, Generic[T]):
    """One page of a list endpoint."""
    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    last: bool

    @classmethod
    def from_page(cls, page: Page, mapper: Callable[..., T]) -> "PagedResponse[T]":
        return cls(
            content=[mapper(item) for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            last=page.last,
        )
