"""Library configuration: ResultConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from presult._logging import configure_logging

__all__ = [
    'ResultConfig',
    'get_config',
    'init',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class ResultConfig:
    """Configuration for presult.

    Attributes:
        capture: Exception classes that capture boundaries (``from_throwable``,
            ``from_awaitable``, ``AsyncResult(...)``) convert into Err.
            Cancellation and process-level signals always propagate.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON (True) or coloured console lines (False).
        log_captures: Emit a DEBUG ``exception_captured`` event on every capture.
    """

    capture: tuple[type[BaseException], ...] = (Exception,)
    log_level: str | None = None
    json_logs: bool = True
    log_captures: bool = True


_DEFAULT_CONFIG = ResultConfig()

# Global configuration (set by init())
_config: ResultConfig | None = None


def _detect_log_level() -> str | None:
    """Read PRESULT_LOG_LEVEL, ignoring unknown level names."""
    env_level = os.environ.get('PRESULT_LOG_LEVEL', '').upper()
    if not env_level:
        return None
    if env_level not in logging.getLevelNamesMapping():
        logging.warning("Unknown PRESULT_LOG_LEVEL value '%s', ignoring", env_level)
        return None
    return env_level


def _detect_json_logs() -> bool:
    """Read PRESULT_LOG_FORMAT ("json" or "console")."""
    env_format = os.environ.get('PRESULT_LOG_FORMAT', '').lower()
    if env_format == 'console':
        return False
    if env_format and env_format != 'json':
        logging.warning("Unknown PRESULT_LOG_FORMAT value '%s', defaulting to json", env_format)
    return True


def _detect_log_captures() -> bool:
    """Read PRESULT_LOG_CAPTURES as a boolean flag."""
    env_flag = os.environ.get('PRESULT_LOG_CAPTURES', '').lower()
    if env_flag in _FALSY:
        return False
    if env_flag and env_flag not in _TRUTHY:
        logging.warning("Unknown PRESULT_LOG_CAPTURES value '%s', defaulting to true", env_flag)
    return True


def _validate_capture(capture: tuple[type[BaseException], ...]) -> tuple[type[BaseException], ...]:
    if not isinstance(capture, tuple) or not capture:
        msg = f'capture must be a non-empty tuple of exception classes, got {capture!r}'
        raise TypeError(msg)
    for exc_type in capture:
        if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
            msg = f'capture entries must be exception classes, got {exc_type!r}'
            raise TypeError(msg)
    return capture


def init(
    *,
    capture: tuple[type[BaseException], ...] | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
    log_captures: bool | None = None,
) -> ResultConfig:
    """Initialize presult with the given configuration.

    Unset arguments are read from the environment (``PRESULT_LOG_LEVEL``,
    ``PRESULT_LOG_FORMAT``, ``PRESULT_LOG_CAPTURES``) and otherwise default.

    Args:
        capture: Exception classes converted into Err at capture boundaries.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = leave logging alone.
        json_logs: JSON (True) or console (False) log rendering.
        log_captures: Whether to log each captured exception at DEBUG level.

    Returns:
        The ResultConfig that was set.

    Raises:
        TypeError: If capture is not a non-empty tuple of exception classes.

    Example:
        ```python
        import presult

        # Environment-driven defaults
        presult.init()

        # Only treat I/O failures as recoverable, with debug logging
        presult.init(capture=(OSError,), log_level='DEBUG', json_logs=False)
        ```
    """
    global _config  # noqa: PLW0603

    resolved_capture = _validate_capture(capture) if capture is not None else _DEFAULT_CONFIG.capture
    resolved_level = log_level if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()
    resolved_captures = log_captures if log_captures is not None else _detect_log_captures()

    _config = ResultConfig(
        capture=resolved_capture,
        log_level=resolved_level,
        json_logs=resolved_json,
        log_captures=resolved_captures,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> ResultConfig:
    """Get the current configuration.

    Returns:
        The ResultConfig set by init(), or the defaults if init() was never called.

    Example:
        ```python
        from presult import get_config, init

        get_config().capture  # (Exception,)
        init(capture=(ValueError,))
        get_config().capture  # (ValueError,)
        ```
    """
    if _config is None:
        return _DEFAULT_CONFIG
    return _config
