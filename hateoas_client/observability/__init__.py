from hateoas_client.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
)

__all__ = [
    "HumanReadableFormatter",
    "StructuredFormatter",
    "configure_logging",
]
