"""Resource collections and paged resource collections."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from hateoas_client.errors import InvalidArgumentError, MissingLinkError, UnboundResourceError
from hateoas_client.model.link import SELF, Link, parse_links
from hateoas_client.model.options import PageParam, SortOrder
from hateoas_client.model.resource import SHARED_ATTRIBUTES, BaseResource

if TYPE_CHECKING:
    from hateoas_client.http.executor import HttpExecutor

T = TypeVar("T", bound=BaseResource)

FIRST = "first"
PREV = "prev"
NEXT = "next"
LAST = "last"


@dataclass(frozen=True)
class PageData:
    """Page metadata of a paged collection."""

    size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    number: int = 0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> PageData:
        raw = raw or {}
        return cls(
            size=int(raw.get("size", 0)),
            total_elements=int(raw.get("totalElements", 0)),
            total_pages=int(raw.get("totalPages", 0)),
            number=int(raw.get("number", 0)),
        )


class ResourceCollection(Generic[T]):
    """Ordered resources plus the collection's own links."""

    def __init__(
        self,
        resources: list[T] | None = None,
        links: Mapping[str, Any] | None = None,
        client: HttpExecutor | None = None,
    ) -> None:
        self.resources: list[T] = list(resources or [])
        self._links = parse_links(links or {})
        self._client = client

    @property
    def links(self) -> Mapping[str, Link]:
        return self._links

    @property
    def self_href(self) -> str | None:
        link = self._links.get(SELF)
        return link.href if link else None

    def __iter__(self) -> Iterator[T]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def __getitem__(self, index: int) -> T:
        return self.resources[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceCollection):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.self_href == other.self_href
            and self.resources == other.resources
        )

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: dict[int, Any]) -> ResourceCollection[T]:
        clone = type(self).__new__(type(self))
        for name, value in self.__dict__.items():
            clone.__dict__[name] = value if name in SHARED_ATTRIBUTES else copy.deepcopy(value, memo)
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}(resources={self.resources!r})"

    def _bound_client(self) -> HttpExecutor:
        if self._client is None:
            raise UnboundResourceError()
        return self._client


class PagedResourceCollection(ResourceCollection[T]):
    """A collection page with its PageData and first/prev/next/last links.

    Navigation methods return a new PagedResourceCollection; the current
    one is left unchanged.
    """

    def __init__(
        self,
        resources: list[T] | None = None,
        links: Mapping[str, Any] | None = None,
        client: HttpExecutor | None = None,
        page_data: PageData | None = None,
    ) -> None:
        super().__init__(resources, links, client)
        self.page_data = page_data or PageData()

    @property
    def total_elements(self) -> int:
        return self.page_data.total_elements

    @property
    def total_pages(self) -> int:
        return self.page_data.total_pages

    @property
    def page_number(self) -> int:
        return self.page_data.number

    @property
    def page_size(self) -> int:
        return self.page_data.size

    def __eq__(self, other: object) -> bool:
        result = super().__eq__(other)
        if result is NotImplemented or not result:
            return result
        return self.page_data == other.page_data  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def has_first(self) -> bool:
        return FIRST in self._links

    def has_prev(self) -> bool:
        return PREV in self._links

    def has_next(self) -> bool:
        return NEXT in self._links

    def has_last(self) -> bool:
        return LAST in self._links

    async def first(self) -> PagedResourceCollection[T]:
        return await self._navigate(FIRST)

    async def prev(self) -> PagedResourceCollection[T]:
        return await self._navigate(PREV)

    async def next(self) -> PagedResourceCollection[T]:
        return await self._navigate(NEXT)

    async def last(self) -> PagedResourceCollection[T]:
        return await self._navigate(LAST)

    async def page(
        self,
        number: int,
        size: int | None = None,
        sort: Mapping[str, SortOrder | str] | None = None,
    ) -> PagedResourceCollection[T]:
        """Fetch page ``number`` of this collection.

        Args:
            number: 0-based page index, below ``total_pages``.
            size: Page size, defaults to the current page size.
            sort: Sort fields, none by default.

        Raises:
            InvalidArgumentError: If the page number is out of range.
            MissingLinkError: If the collection has no self link.
        """
        max_page = max(self.page_data.total_pages, 1) - 1
        if number < 0 or number > max_page:
            raise InvalidArgumentError(
                f"Error page number. Max page number is {max_page}",
                page=number,
            )
        page_param = PageParam(
            page=number,
            size=size or self.page_data.size or PageParam().size,
            sort=dict(sort or {}),
        )
        return await self._bound_client().get_page_of(self, page_param)

    async def _navigate(self, relation: str) -> PagedResourceCollection[T]:
        if relation not in self._links:
            raise MissingLinkError(f"There is no '{relation}' page link", relation=relation)
        return await self._bound_client().navigate(self._links[relation])
