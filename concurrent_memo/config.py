from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import FALSY_VALUES, TRUTHY_VALUES, Constraints, Defaults, EnvVars
from .domain.exceptions import ConfigError


@dataclass(frozen=True, slots=True)
class MemoConfig:
    verbosity: int = Defaults.VERBOSITY
    strong_fallback: bool = Defaults.STRONG_FALLBACK
    key_repr_limit: int = Defaults.KEY_REPR_LIMIT
    name: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.verbosity <= Constraints.MAX_VERBOSITY:
            raise ConfigError(
                f"verbosity must be between 0 and {Constraints.MAX_VERBOSITY}, got {self.verbosity}"
            )
        if self.key_repr_limit < Constraints.MIN_KEY_REPR_LIMIT:
            raise ConfigError(
                f"key_repr_limit must be at least {Constraints.MIN_KEY_REPR_LIMIT}, got {self.key_repr_limit}"
            )
        if self.name is not None and not self.name.strip():
            raise ConfigError("name must not be blank")

    def with_name(self, name: str | None) -> MemoConfig:
        return replace(self, name=name)

    @classmethod
    def from_env(cls) -> MemoConfig:
        return cls(
            verbosity=_coerce_int(
                os.getenv(EnvVars.VERBOSITY, str(Defaults.VERBOSITY)),
                key=EnvVars.VERBOSITY,
            ),
            strong_fallback=_coerce_bool(
                os.getenv(EnvVars.STRONG_FALLBACK, str(Defaults.STRONG_FALLBACK)),
                key=EnvVars.STRONG_FALLBACK,
            ),
            key_repr_limit=_coerce_int(
                os.getenv(EnvVars.KEY_REPR_LIMIT, str(Defaults.KEY_REPR_LIMIT)),
                key=EnvVars.KEY_REPR_LIMIT,
            ),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> MemoConfig:
        config = MemoConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: MemoConfig) -> MemoConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        logging_section = _get_table(data, "logging")
        cache_section = _get_table(data, "cache")
        verbosity = base_config.verbosity
        if (value := logging_section.get("verbosity")) is not None:
            verbosity = _coerce_int(value, key="logging.verbosity")
        key_repr_limit = base_config.key_repr_limit
        if (value := logging_section.get("key_repr_limit")) is not None:
            key_repr_limit = _coerce_int(value, key="logging.key_repr_limit")
        strong_fallback = base_config.strong_fallback
        if (value := cache_section.get("strong_fallback")) is not None:
            strong_fallback = _coerce_bool(value, key="cache.strong_fallback")
        return MemoConfig(
            verbosity=verbosity,
            strong_fallback=strong_fallback,
            key_repr_limit=key_repr_limit,
            name=base_config.name,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ConfigError(f"{key} must be int-like, got {value!r}") from None
    raise ConfigError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY_VALUES:
            return True
        if lowered in FALSY_VALUES:
            return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")
