"""Config-domain exports."""

from workitems.core.config.loader import DEFAULT_CONFIG_NAME, load_config, write_config
from workitems.core.config.log_setup import configure_logging

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "configure_logging",
    "load_config",
    "write_config",
]
