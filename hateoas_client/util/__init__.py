from hateoas_client.util.url import (
    convert_to_params,
    fill_template_params,
    generate_resource_url,
    remove_template_params,
    resource_name_from_url,
)
from hateoas_client.util.validation import validate_input_params

__all__ = [
    "convert_to_params",
    "fill_template_params",
    "generate_resource_url",
    "remove_template_params",
    "resource_name_from_url",
    "validate_input_params",
]
