"""
Configuration management for SneakerSecure.

Provides a clean public API for all configuration components.
"""

# Base infrastructure
from .base import DEFAULT_CONFIG_FILE, DEFAULT_TRUSTED_IDS, ENV_PREFIX, Environment

# Main configuration class
from .main import Config

# Runtime configuration
from .runtime import (
    CatalogConfig,
    LoggingConfig,
    MigrationConfig,
    SessionConfig,
    StoreConfig,
    VerificationConfig,
)
from .yaml_loader import YAMLConfigLoader, load_yaml

# Public API
__all__ = [
    # Main class
    "Config",
    # Base
    "Environment",
    "ENV_PREFIX",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_TRUSTED_IDS",
    # Runtime
    "CatalogConfig",
    "LoggingConfig",
    "MigrationConfig",
    "SessionConfig",
    "StoreConfig",
    "VerificationConfig",
    # Loading
    "YAMLConfigLoader",
    "load_yaml",
]
