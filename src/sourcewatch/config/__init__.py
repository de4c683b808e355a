"""Configuration for sourcewatch.

Configuration is read from an optional TOML file, SOURCEWATCH_* environment
variables and explicit overrides, then validated into frozen Pydantic models.
"""

from ._loader import (
    ENV_PREFIX,
    deep_merge,
    load_config,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    BackoffConfig,
    ClientConfig,
    Config,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MonitorConfig,
)

__all__ = [
    "ENV_PREFIX",
    "BackoffConfig",
    "ClientConfig",
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "MonitorConfig",
    "deep_merge",
    "load_config",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
