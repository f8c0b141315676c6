"""Configuration helpers for the live scan app."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import tomllib

from chromaworks.libs.color.sampler import PixelFormat

logger = logging.getLogger(__name__)

_CONFIG_ENV_PREFIX = "CHROMAWORKS_LIVE_SCAN__"


def _find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the closest ``pyproject.toml`` relative to *start*."""

    current = (start or Path.cwd()).resolve()
    for candidate in [current, *current.parents]:
        pyproject = candidate / "pyproject.toml"
        if pyproject.exists():
            return pyproject
    return None


def _coerce_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer setting %r", value)
        return default


def _coerce_float(value: object, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric setting %r", value)
        return default


def _coerce_str(value: object, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


@dataclass(frozen=True)
class ScanSettings:
    """Defaults sourced from ``[tool.chromaworks.live_scan]`` and the environment."""

    default_window_size: int = 10
    default_image_window_size: int = 20
    default_history_length: int = 5
    default_update_interval: float = 0.1
    default_pixel_format: str = "BGR"
    default_source: str = "0"
    default_max_frames: int = 0
    default_log_name: str = "live_scan"


@dataclass(frozen=True)
class ScanConfig:
    """Fully resolved runtime configuration for one scan or analysis run."""

    window_size: int
    image_window_size: int
    history_length: int
    update_interval: float
    pixel_format: PixelFormat
    source: str
    max_frames: int
    log_name: str

    @property
    def capture_source(self) -> int | str:
        """Camera index when ``source`` is numeric, otherwise a path or URL."""

        return int(self.source) if self.source.isdigit() else self.source


def _load_pyproject_settings(start: Optional[Path]) -> Dict[str, object]:
    pyproject = _find_pyproject(start)
    if not pyproject:
        return {}

    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Failed to load config from %s: %s", pyproject, exc)
        return {}

    tool_cfg = data.get("tool", {}).get("chromaworks", {})
    if not isinstance(tool_cfg, dict):
        return {}

    scan_cfg = tool_cfg.get("live_scan")
    return dict(scan_cfg) if isinstance(scan_cfg, dict) else {}


def _load_env_settings() -> Dict[str, object]:
    values: Dict[str, object] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(_CONFIG_ENV_PREFIX):
            continue
        key = env_key[len(_CONFIG_ENV_PREFIX) :].lower()
        values[key] = env_value
    return values


def load_settings(start: Optional[Path] = None) -> ScanSettings:
    """Load project defaults, applying environment overrides when present."""

    raw = _load_pyproject_settings(start)
    raw.update(_load_env_settings())

    return ScanSettings(
        default_window_size=_coerce_int(
            raw.get("window_size"), ScanSettings.default_window_size
        ),
        default_image_window_size=_coerce_int(
            raw.get("image_window_size"), ScanSettings.default_image_window_size
        ),
        default_history_length=_coerce_int(
            raw.get("history_length"), ScanSettings.default_history_length
        ),
        default_update_interval=_coerce_float(
            raw.get("update_interval"), ScanSettings.default_update_interval
        ),
        default_pixel_format=_coerce_str(
            raw.get("pixel_format"), ScanSettings.default_pixel_format
        ),
        default_source=_coerce_str(raw.get("source"), ScanSettings.default_source),
        default_max_frames=_coerce_int(
            raw.get("max_frames"), ScanSettings.default_max_frames
        ),
        default_log_name=_coerce_str(
            raw.get("log_name"), ScanSettings.default_log_name
        ),
    )


def build_runtime_config(
    *,
    settings: ScanSettings,
    window_size: Optional[int] = None,
    image_window_size: Optional[int] = None,
    history_length: Optional[int] = None,
    update_interval: Optional[float] = None,
    pixel_format: Optional[str] = None,
    source: Optional[str] = None,
    max_frames: Optional[int] = None,
) -> ScanConfig:
    """Merge CLI overrides with defaults to produce a validated runtime config."""

    resolved_window = (
        settings.default_window_size if window_size is None else int(window_size)
    )
    resolved_image_window = (
        settings.default_image_window_size
        if image_window_size is None
        else int(image_window_size)
    )
    if resolved_window < 1 or resolved_image_window < 1:
        raise ValueError("Sampling window sizes must be at least 1 pixel")

    resolved_history = (
        settings.default_history_length
        if history_length is None
        else int(history_length)
    )
    if resolved_history < 1:
        raise ValueError("History length must be at least 1 sample")

    resolved_interval = (
        settings.default_update_interval
        if update_interval is None
        else float(update_interval)
    )
    if resolved_interval < 0:
        raise ValueError("Update interval cannot be negative")

    resolved_format = PixelFormat.from_name(
        pixel_format or settings.default_pixel_format
    )

    resolved_max_frames = (
        settings.default_max_frames if max_frames is None else int(max_frames)
    )
    if resolved_max_frames < 0:
        raise ValueError("max_frames cannot be negative (use 0 for no limit)")

    return ScanConfig(
        window_size=resolved_window,
        image_window_size=resolved_image_window,
        history_length=resolved_history,
        update_interval=resolved_interval,
        pixel_format=resolved_format,
        source=(source or settings.default_source).strip(),
        max_frames=resolved_max_frames,
        log_name=settings.default_log_name,
    )


def load_config(*, start: Optional[Path] = None, **overrides: object) -> ScanConfig:
    """Convenience helper used by the CLI to resolve the runtime config."""

    settings = load_settings(start)
    return build_runtime_config(settings=settings, **overrides)
