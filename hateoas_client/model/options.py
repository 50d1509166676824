"""Request options: pagination, sorting, projection and query params."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from hateoas_client.errors import InvalidArgumentError

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20


class SortOrder(str, Enum):
    """Sort direction for a single field."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class PageParam:
    """Request-side pagination controls.

    ``sort`` keeps insertion order; each entry becomes one
    ``sort=field,DIRECTION`` query param.
    """

    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort: dict[str, SortOrder] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise InvalidArgumentError(f"Page number must be >= 0, got {self.page}", field_name="page")
        if self.size <= 0:
            raise InvalidArgumentError(f"Page size must be > 0, got {self.size}", field_name="size")
        try:
            sort = {
                name: SortOrder(order.upper() if isinstance(order, str) else order)
                for name, order in self.sort.items()
            }
        except ValueError as e:
            raise InvalidArgumentError(f"Sort direction must be ASC or DESC: {e}", field_name="sort") from e
        object.__setattr__(self, "sort", sort)


@dataclass(frozen=True)
class GetOption:
    """Options for GET requests.

    Attributes:
        params: Extra query params; values may be primitives or resources
            (sent as their self link href).
        page_param: Pagination and sorting.
        projection: Server-side projection name.
    """

    params: dict[str, Any] = field(default_factory=dict)
    page_param: PageParam | None = None
    projection: str | None = None

    def is_empty(self) -> bool:
        return not self.params and self.page_param is None and not self.projection

    def with_default_page(self, size: int = DEFAULT_PAGE_SIZE) -> GetOption:
        """Return a copy carrying ``PageParam(page=0, size=size)`` when no page is set."""
        if self.page_param is not None:
            return self
        return replace(self, page_param=PageParam(page=DEFAULT_PAGE, size=size))


@dataclass(frozen=True)
class RequestOption:
    """Options for mutating and custom requests."""

    params: dict[str, Any] = field(default_factory=dict)
