"""
Base configuration infrastructure for SneakerSecure.

Contains constants and the Environment enum.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

# Environment variable prefix for overrides
ENV_PREFIX = "SNKR_"

# Default config file looked up by the CLI and bootstrap
DEFAULT_CONFIG_FILE = "configs/sneaker_secure.yaml"

# Identifier attested by the manufacturer in the shipped registry
DEFAULT_TRUSTED_IDS = ("d3b59a87-86f4-473a-8a96-78f5ccee853b",)


class Environment(Enum):
    """Environment types for configuration."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"
