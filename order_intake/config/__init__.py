from .loader import DEFAULT_CONFIG_PATH, ConfigError, IntakeConfig, load_config

__all__ = [
    "ConfigError",
    "IntakeConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]
