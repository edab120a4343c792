"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. Environment variable referenced by ``logging.level_env``

:func:`default_config` skips the environment and caches the packaged
defaults; it is what objects built without an explicit config use.
"""

from .schema import ButtonDefaults, ConfigModel, LoggingSettings, default_config, load_config

__all__ = ["ButtonDefaults", "ConfigModel", "LoggingSettings", "default_config", "load_config"]
