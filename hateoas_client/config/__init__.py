from hateoas_client.config.settings import HalConfiguration, load_config

__all__ = ["HalConfiguration", "load_config"]
