"""Typed configuration schema and loader for the buttonlock package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

FacePolicyName = Literal["none", "keep", "prepend", "append", "override"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ButtonDefaults(BaseModel):
    """Defaults applied by :meth:`BindingRegistry.set` for omitted options."""

    face: str | None
    mouse_face: str | None
    face_policy: FacePolicyName
    mouse_binding: str
    grouping: conint(ge=0) = 0
    rear_sticky: bool = False

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Package logging settings."""

    level: LogLevelName
    level_env: str

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    buttons: ButtonDefaults
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``logging.level_env``.
    """

    with (
        importlib_resources.files("buttonlock.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    level_env = cfg.logging.level_env
    if environ.get(level_env):
        data = cfg.model_dump()
        data["logging"]["level"] = environ[level_env].upper()
        cfg = ConfigModel.model_validate(data)

    return cfg


@lru_cache(maxsize=1)
def _packaged_defaults() -> ConfigModel:
    return load_config(env={})


def default_config() -> ConfigModel:
    """Return a copy of the packaged defaults, loaded once per process.

    The environment is not consulted.
    """

    return _packaged_defaults().model_copy(deep=True)


__all__ = [
    "ButtonDefaults",
    "ConfigModel",
    "LoggingSettings",
    "deep_merge_dicts",
    "default_config",
    "load_config",
]
