"""Persist and load valuation config profiles."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig


logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "NEXUSDFS_VALUATION_CONFIG"


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _is_lookup_table(value: Any) -> bool:
    # Tuples of (str or int key, value) pairs, e.g. stack_scores.
    return bool(value) and all(
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], (str, int))
        for item in value
    )


def _coerce(current: Any, raw: Any, key: str) -> Any:
    if is_dataclass(current):
        if not isinstance(raw, Mapping):
            raise ValueError(f"{key} expects an object, got {raw!r}")
        unknown = sorted(set(raw) - {f.name for f in fields(current)})
        if unknown:
            raise ValueError(f"Unknown {key} keys: {', '.join(unknown)}")
        return replace(current, **raw)
    if isinstance(current, tuple):
        if isinstance(raw, Mapping) and _is_lookup_table(current):
            key_type = type(current[0][0])
            merged = dict(current)
            merged.update({key_type(k): v for k, v in raw.items()})
            return tuple(merged.items())
        if not isinstance(raw, list):
            raise ValueError(f"{key} expects a list, got {raw!r}")
        return _freeze(raw)
    return raw


def apply_overrides(config: ValuationConfig, overrides: Mapping[str, Any]) -> ValuationConfig:
    """Return a copy of ``config`` with ``overrides`` applied, rejecting unknown keys."""

    known = {f.name for f in fields(config)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown valuation config keys: {', '.join(unknown)}")
    updates = {key: _coerce(getattr(config, key), value, key) for key, value in overrides.items()}
    return replace(config, **updates)


def load_valuation_config(path: Path, *, base: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> ValuationConfig:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid valuation config JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Valuation config in {path} must be a JSON object")
    config = apply_overrides(base, data)
    logger.info("Loaded %d valuation config overrides from %s", len(data), path)
    return config


def save_valuation_config(config: ValuationConfig, path: Path) -> None:
    payload: Dict[str, Any] = asdict(config)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def config_from_env() -> ValuationConfig:
    raw = os.getenv(CONFIG_PATH_ENV)
    if not raw:
        return DEFAULT_VALUATION_CONFIG
    path = Path(raw)
    if not path.exists():
        logger.warning("Valuation config %s does not exist; using defaults", path)
        return DEFAULT_VALUATION_CONFIG
    return load_valuation_config(path)
