"""Classification and construction of typed resources from raw HAL JSON.

The factory lives in ``hateoas_client.resolve.factory``; it is not imported
here because it depends on the model package, which depends on this one.
"""

from hateoas_client.resolve.classifier import ResourceKind, classify

__all__ = ["ResourceKind", "classify"]
