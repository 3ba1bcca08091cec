"""Library configuration: KnitConfig, environment resolution, and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from knit_core._logging import configure_logging

__all__ = [
    'UNSET',
    'KnitConfig',
    'current_config',
    'get_config',
    'init',
]

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class _Unset:
    """Sentinel for 'argument not given', distinct from an explicit None."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'UNSET'


UNSET: Final = _Unset()


@dataclass(frozen=True)
class KnitConfig:
    """Configuration for knit-core.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Emit JSON log lines when True, console output otherwise.
        memo_maxsize: Default cache bound for memoize(). None = unbounded.
    """

    log_level: str | None = None
    json_logs: bool = True
    memo_maxsize: int | None = None


# Global configuration (set by init())
_config: KnitConfig | None = None


def _detect_log_level() -> str | None:
    """Read KNIT_LOG_LEVEL; unknown values are ignored with a warning."""
    env_level = os.environ.get('KNIT_LOG_LEVEL', '').upper()
    if not env_level:
        return None
    if env_level not in _LOG_LEVELS:
        logging.warning("Unknown KNIT_LOG_LEVEL value '%s', logging stays disabled", env_level)
        return None
    return env_level


def _detect_json_logs() -> bool:
    """Read KNIT_LOG_FORMAT ("json" or "console"), defaulting to JSON."""
    env_format = os.environ.get('KNIT_LOG_FORMAT', '').lower()
    if env_format == 'console':
        return False
    if env_format and env_format != 'json':
        logging.warning("Unknown KNIT_LOG_FORMAT value '%s', defaulting to json", env_format)
    return True


def _detect_memo_maxsize() -> int | None:
    """Read KNIT_MEMO_MAXSIZE (a positive integer or "none")."""
    env_maxsize = os.environ.get('KNIT_MEMO_MAXSIZE', '').strip().lower()
    if not env_maxsize or env_maxsize == 'none':
        return None
    try:
        maxsize = int(env_maxsize)
    except ValueError:
        logging.warning("Unknown KNIT_MEMO_MAXSIZE value '%s', caches stay unbounded", env_maxsize)
        return None
    if maxsize < 1:
        logging.warning('KNIT_MEMO_MAXSIZE must be positive, got %d; caches stay unbounded', maxsize)
        return None
    return maxsize


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    memo_maxsize: int | None | _Unset = UNSET,
) -> KnitConfig:
    """Initialize knit-core with the specified configuration.

    Each setting comes from the explicit argument when given, then from the
    environment, then from the KnitConfig default.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = from KNIT_LOG_LEVEL.
        json_logs: JSON (True) or console (False) logs. None = from KNIT_LOG_FORMAT.
        memo_maxsize: Default memoize() bound. Pass None explicitly for unbounded;
            leave unset to read KNIT_MEMO_MAXSIZE.

    Returns:
        The KnitConfig that was set.

    Raises:
        ValueError: If memo_maxsize is given and not positive.

    Example:
        ```python
        from knit_core import init

        # Everything from the environment
        init()

        # Explicit configuration
        init("DEBUG", json_logs=False, memo_maxsize=1024)
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level.upper() if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()

    if isinstance(memo_maxsize, _Unset):
        resolved_maxsize = _detect_memo_maxsize()
    else:
        if memo_maxsize is not None and memo_maxsize < 1:
            msg = f'memo_maxsize must be a positive integer or None, got {memo_maxsize}'
            raise ValueError(msg)
        resolved_maxsize = memo_maxsize

    _config = KnitConfig(
        log_level=resolved_level,
        json_logs=resolved_json,
        memo_maxsize=resolved_maxsize,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> KnitConfig:
    """Get the current configuration.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'knit-core not initialized. Call knit_core.init() first.'
        raise RuntimeError(msg)
    return _config


def current_config() -> KnitConfig:
    """Get the current configuration, or the defaults if init() was never called."""
    if _config is None:
        return KnitConfig()
    return _config
