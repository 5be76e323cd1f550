from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_CONFIG_FILE = "EVREG_CONFIG_FILE"
ENV_MAX_LISTENERS = "EVREG_MAX_LISTENERS"
ENV_LOG_EMITS = "EVREG_LOG_EMITS"

DEFAULT_MAX_LISTENERS = 10


def _as_int(value: Any) -> int:
    """Accept ints and integer strings; reject bools, floats and anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey spellings.

    Accepts True/False, the numbers 1/0 and "true"/"false", "yes"/"no", "on"/"off"
    (case-insensitive). Anything else raises ValueError.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True)
class RegistryConfig:
    """Tunables for an EventRegistry.

    max_listeners: per-channel count above which a leak warning is logged
        once for that channel. 0 disables the warning.
    log_emits: log every emit at DEBUG, payload included.
    """

    max_listeners: int = DEFAULT_MAX_LISTENERS
    log_emits: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RegistryConfig":
        max_listeners = _as_int(data.get("max_listeners", DEFAULT_MAX_LISTENERS))
        if max_listeners < 0:
            logger.warning(
                "Invalid max_listeners %s; resetting to %d", max_listeners, DEFAULT_MAX_LISTENERS
            )
            max_listeners = DEFAULT_MAX_LISTENERS
        log_emits = _as_bool(data.get("log_emits", False))
        return cls(max_listeners=max_listeners, log_emits=log_emits)


def _read_yaml(text: str, source: str) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {source}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping at the top of {source}, got {type(raw).__name__}")
    return raw


def _load_defaults() -> Dict[str, Any]:
    text = resource_files("event_registry.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded registry defaults resource")
    return _read_yaml(text, "defaults.yaml")


def _load_file(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    logger.debug("Loaded registry config from path: %s", path)
    return _read_yaml(text, str(path))


def _from_env(env: Mapping[str, str]) -> Dict[str, Any]:
    mapping = {
        ENV_MAX_LISTENERS: ("max_listeners", _as_int),
        ENV_LOG_EMITS: ("log_emits", _as_bool),
    }
    out: Dict[str, Any] = {}
    for env_key, (field_name, caster) in mapping.items():
        if env.get(env_key, "") == "":
            continue
        try:
            out[field_name] = caster(env[env_key])
        except ValueError as exc:
            logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
    return out


def load_config(
    path: Optional[Path | str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> RegistryConfig:
    """Build a RegistryConfig.

    Order of precedence (lowest to highest): embedded defaults < file < env.
    The file is ``path`` if given, else the one named by EVREG_CONFIG_FILE.
    """
    env = os.environ if env is None else env
    data = _load_defaults()

    if path is None and env.get(ENV_CONFIG_FILE):
        path = env[ENV_CONFIG_FILE]
    if path is not None:
        data.update(_load_file(Path(path).expanduser()))

    data.update(_from_env(env))
    try:
        config = RegistryConfig.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid registry config values {data!r}: {exc}") from exc
    logger.info("Registry config: max_listeners=%d | log_emits=%s", config.max_listeners, config.log_emits)
    return config
