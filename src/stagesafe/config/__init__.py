"""Configuration loading, schema, and defaults."""

from stagesafe.config.loader import ConfigError, load_config
from stagesafe.config.schema import AdmissionPolicy, PolicyError, StageSafeConfig

__all__ = [
    "AdmissionPolicy",
    "ConfigError",
    "PolicyError",
    "StageSafeConfig",
    "load_config",
]
