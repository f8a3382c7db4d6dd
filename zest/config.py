from __future__ import annotations
import logging
import os
from typing import Optional


_TRUE_WORDS = ('1', 'true', 'yes', 'on')

# Defaults
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_MAX_DEPTH = 300


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if not raw:
        return default
    return raw.strip().lower() in _TRUE_WORDS


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_barewords() -> bool:
    """Whether bare words lex as self-quoting strings instead of variables."""
    return flag_from_env('ZEST_BAREWORDS')


def get_max_depth() -> int:
    return int_from_env('ZEST_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_log_level() -> str:
    return os.environ.get('ZEST_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply ZEST_LOG_LEVEL (or `level`) to the package logger."""
    logger = logging.getLogger('zest')
    logger.setLevel(level.upper() if level else get_log_level())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(name)s %(levelname)s: %(message)s'))
        logger.addHandler(handler)
    return logger
