"""URL building, URI template handling and query param conversion."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode, urlsplit

import httpx

from hateoas_client.errors import InvalidArgumentError, ReservedParamConflictError
from hateoas_client.model.link import SELF, Link
from hateoas_client.model.options import GetOption, RequestOption

PAGE_PARAMS = ("page", "size", "sort")
PROJECTION_PARAM = "projection"

_TEMPLATE_SUFFIX = re.compile(r"\{[?&][^{}]*\}$")


def generate_resource_url(base_url: str | None, resource_name: str | None, query: str | None = None) -> str:
    """Compose ``base_url/resource_name[/query]``.

    Raises:
        InvalidArgumentError: If base_url or resource_name is None or empty.
    """
    if not base_url or not resource_name:
        raise InvalidArgumentError("Base url and resource name should be defined")

    url = f"{base_url.rstrip('/')}/{resource_name}"
    if query:
        url = f"{url}/{query}"
    return url


def remove_template_params(url: str | None) -> str:
    """Strip a trailing ``{?a,b,c}`` template suffix from ``url``."""
    if not url:
        raise InvalidArgumentError("Url should be defined")
    return _TEMPLATE_SUFFIX.sub("", url)


def fill_template_params(url: str | None, options: GetOption | RequestOption | None) -> str:
    """Replace the template suffix of ``url`` with a query string built from ``options``.

    Params follow the :func:`convert_to_params` order except that ``sort``
    entries come last. Without options the template is removed and no
    query string appended.
    """
    if not url:
        raise InvalidArgumentError("Url should be defined")

    bare_url = remove_template_params(url)
    items = convert_to_params(options).multi_items()
    if not items:
        return bare_url

    items.sort(key=lambda item: item[0] == "sort")
    separator = "&" if "?" in bare_url else "?"
    return f"{bare_url}{separator}{urlencode(items, safe=',')}"


def convert_to_params(options: GetOption | RequestOption | None) -> httpx.QueryParams:
    """Convert request options to an ordered query param multi-map.

    Order: ``page``, ``size``, one ``sort`` per sorted field, ``projection``,
    then ``params`` in insertion order.

    Raises:
        ReservedParamConflictError: If ``options.params`` holds a reserved key.
    """
    if options is None:
        return httpx.QueryParams()

    items: list[tuple[str, str]] = []
    page_param = getattr(options, "page_param", None)
    projection = getattr(options, "projection", None)

    if page_param is not None:
        items.append(("page", str(page_param.page)))
        items.append(("size", str(page_param.size)))
        for name, order in page_param.sort.items():
            items.append(("sort", f"{name},{order.value}"))

    if projection:
        items.append((PROJECTION_PARAM, projection))

    for name, value in (options.params or {}).items():
        if name == PROJECTION_PARAM:
            raise ReservedParamConflictError(
                "Please, pass projection param in projection object key, not with params object!",
                param=name,
            )
        if name in PAGE_PARAMS:
            raise ReservedParamConflictError(
                "Please, pass page params in page object key, not with params object!",
                param=name,
            )
        items.append((name, param_to_str(value)))

    return httpx.QueryParams(items)


def param_to_str(value: Any) -> str:
    """Render a query param value; resources render as their self link href."""
    href = _self_href(value)
    if href is not None:
        return href
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def resource_name_from_url(url: str, base_url: str) -> str | None:
    """Return the first path segment of ``url`` below ``base_url``.

    ``http://h/api/v1/products/1/category`` with base ``http://h/api/v1``
    gives ``products``. URLs outside the base fall back to their first path
    segment.
    """
    bare_url = remove_template_params(url).split("?", 1)[0]
    base = base_url.rstrip("/")
    if bare_url.startswith(base + "/"):
        path = bare_url[len(base) + 1 :]
    else:
        path = urlsplit(bare_url).path.lstrip("/")
    segment = path.split("/", 1)[0]
    return segment or None


def _self_href(value: Any) -> str | None:
    links = getattr(value, "links", None)
    if links is None and isinstance(value, Mapping):
        links = value.get("_links")
    if not isinstance(links, Mapping) or SELF not in links:
        return None

    link = links[SELF]
    href = link.href if isinstance(link, Link) else link.get("href") if isinstance(link, Mapping) else None
    return remove_template_params(href) if href else None
