"""Configuration loading: YAML file, environment and CLI override layers."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import ValidationError

from penguinetl.core.errors import ConfigError
from penguinetl.core.log_events import LogEvents
from penguinetl.core.logger import UnifiedLogger

from .models import PipelineConfig

ENV_PREFIX = "PENGUINETL__"

logger = UnifiedLogger.get(__name__)


def load_config(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    env_prefix: str = ENV_PREFIX,
) -> PipelineConfig:
    """Load, merge and validate a pipeline configuration.

    Layers, lowest precedence first: model defaults, the YAML file at
    ``config_path`` (with its ``extends`` chain), ``PENGUINETL__SECTION__KEY``
    environment variables, then ``cli_overrides`` given as dotted keys
    (``{"normalization.date_policy": "strict"}``).
    """

    merged: dict[str, Any] = {}
    if config_path is not None:
        merged = load_raw_config(_resolve_config_path(config_path))

    env_overrides = _collect_env_overrides(os.environ if env is None else env, prefix=env_prefix)
    if env_overrides:
        merged = _deep_merge(merged, env_overrides)

    if cli_overrides:
        pairs = [
            (tuple(dotted_key.split(".")), _coerce_value(raw_value))
            for dotted_key, raw_value in cli_overrides.items()
        ]
        merged = _deep_merge(merged, build_overrides(pairs))

    try:
        config = PipelineConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Configuration validation failed: {exc}") from exc

    logger.debug(
        LogEvents.CONFIG_LOAD_FINISH,
        config_path=str(config_path) if config_path is not None else None,
        policy=config.policy.value,
    )
    return config


def load_raw_config(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file, resolving ``extends`` recursively."""

    return _load_with_extends(path, stack=())


def parse_set_overrides(set_overrides: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings from ``--set`` flags into a mapping."""

    parsed: dict[str, str] = {}
    for override in set_overrides:
        key, separator, value = override.partition("=")
        key = key.strip()
        if not separator or not key:
            raise ConfigError(f"Invalid override {override!r}; expected KEY=VALUE")
        parsed[key] = value
    return parsed


def build_overrides(pairs: Iterable[tuple[Sequence[str], Any]]) -> dict[str, Any]:
    """Construct a nested mapping from ``pairs`` of path segments and values."""

    tree: dict[str, Any] = {}
    for raw_parts, value in pairs:
        parts = tuple(str(part) for part in raw_parts if str(part))
        if not parts:
            continue
        current: MutableMapping[str, Any] = tree
        for part in parts[:-1]:
            existing = current.get(part)
            if not isinstance(existing, MutableMapping):
                existing = {}
                current[part] = existing
            current = existing
        current[parts[-1]] = value
    return tree


def _resolve_config_path(config_path: str | Path) -> Path:
    path = Path(config_path).expanduser().resolve()
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")
    return path


def _load_with_extends(path: Path, *, stack: Sequence[Path]) -> dict[str, Any]:
    resolved = path.resolve()
    if resolved in stack:
        cycle = " -> ".join(str(p) for p in (*stack, resolved))
        raise ConfigError(f"Circular extends detected: {cycle}")

    data = _load_yaml(resolved)
    extends = data.pop("extends", ())
    if isinstance(extends, (str, Path)):
        extends = (extends,)

    merged: dict[str, Any] = {}
    for reference in extends or ():
        reference_path = Path(reference)
        if not reference_path.is_absolute():
            reference_path = resolved.parent / reference_path
        if not reference_path.is_file():
            raise ConfigError(f"Extended configuration not found: {reference_path} (from {resolved})")
        merged = _deep_merge(merged, _load_with_extends(reference_path, stack=(*stack, resolved)))

    return _deep_merge(merged, data)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Configuration root in {path} must be a mapping")
    return dict(cast(Mapping[str, Any], payload))


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mapping-like objects."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(
                cast(Mapping[str, Any], merged[key]),
                cast(Mapping[str, Any], value),
            )
        else:
            merged[key] = value
    return merged


def _coerce_value(value: Any) -> Any:
    """Best-effort conversion of CLI/environment override values."""
    if isinstance(value, str):
        try:
            return yaml.safe_load(value)
        except yaml.YAMLError:
            return value
    return value


def _collect_env_overrides(env: Mapping[str, str], *, prefix: str) -> dict[str, Any]:
    """Collect prefixed environment variables into a nested override tree."""
    if not prefix:
        return {}
    pairs: list[tuple[Sequence[str], Any]] = []
    for key, raw_value in env.items():
        if not key.startswith(prefix):
            continue
        parts = [segment.strip().lower() for segment in key[len(prefix) :].split("__") if segment.strip()]
        if parts:
            pairs.append((tuple(parts), _coerce_value(raw_value)))
    return build_overrides(pairs)
