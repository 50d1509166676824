"""Input validation shared by the HTTP services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hateoas_client.errors import InvalidArgumentError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def validate_input_params(params: Mapping[str, Any]) -> None:
    """Check that every named param is neither None nor an empty string.

    All failing params are reported in one message, in the given order:
    ``Passed param(s) 'resourceName = None', 'searchQuery = ' is not valid``.

    Raises:
        InvalidArgumentError: If any param is blank.
    """
    invalid = [(name, value) for name, value in params.items() if is_blank(value)]
    if not invalid:
        return

    rendered = ", ".join(f"'{name} = {value}'" for name, value in invalid)
    raise InvalidArgumentError(
        f"Passed param(s) {rendered} is not valid",
        invalid_params=[name for name, _ in invalid],
    )
