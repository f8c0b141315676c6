"""Logging setup shared by the ChromaWorks command line tools."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

__all__ = ["configure_logging", "resolve_log_level"]

_MANAGED_HANDLER_FLAG = "_chromaworks_managed_handler"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(value: Union[int, str, None], default: int = logging.INFO) -> int:
    """Translate ``"debug"``/``"INFO"``/``10`` style values into a logging level."""

    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return default
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


def _default_log_directory() -> Path:
    """Pick ``$CHROMAWORKS_LOG_DIR`` or ``<project root>/logs``."""

    env_override = os.environ.get("CHROMAWORKS_LOG_DIR")
    if env_override:
        return Path(env_override).expanduser()

    module_path = Path(__file__).resolve()
    for candidate in module_path.parents:
        if (candidate / "pyproject.toml").exists() or (candidate / ".git").exists():
            return candidate / "logs"

    return Path.cwd() / "logs"


def _remove_managed_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def _managed(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _MANAGED_HANDLER_FLAG, True)
    return handler


def configure_logging(
    log_name: str,
    *,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
    include_console: bool = True,
) -> Path:
    """Route root logging to ``<log_dir>/<log_name>.log`` (and stderr).

    Calling this again swaps out the handlers installed by the previous call,
    so a CLI can reconfigure after parsing ``--debug`` without duplicating
    output.
    """

    resolved_level = resolve_log_level(level)
    target_directory = (
        Path(log_dir).expanduser() if log_dir else _default_log_directory()
    )
    target_directory.mkdir(parents=True, exist_ok=True)
    log_path = target_directory / f"{log_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    _remove_managed_handlers(root_logger)

    root_logger.addHandler(
        _managed(logging.FileHandler(log_path, encoding="utf-8"), resolved_level)
    )
    if include_console:
        root_logger.addHandler(_managed(logging.StreamHandler(), resolved_level))

    logging.captureWarnings(True)

    return log_path
