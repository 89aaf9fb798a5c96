"""Structured logging for presult.

structlog events are rendered by ``structlog.stdlib.ProcessorFormatter``, so
records from plain ``logging`` loggers in the host application come out in the
same JSON or console format as presult's own events.

The library emits a single event, ``exception_captured`` at DEBUG level, when
a capture boundary turns a raise into ``Err``. Hooks registered with
``add_log_hook`` see every event and are the supported way to observe it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import IO, Any

import structlog

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

_HANDLER_NAME = 'presult'

_log_hooks: list[LogHook] = []


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor handing each hook its own copy of the event."""
    for hook in tuple(_log_hooks):
        try:
            hook(dict(event_dict))
        except Exception:  # noqa: BLE001, S112
            continue  # a failing hook must not break logging
    return event_dict


def _pre_chain() -> list[Any]:
    # Applied to structlog events and to foreign stdlib records alike
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt='iso', utc=True),
        structlog.stdlib.ExtraAdder(),
        _run_hooks,
    ]


def _build_formatter(json_output: bool, stream: IO[str]) -> logging.Formatter:
    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib logging through one structured handler.

    Calling this again replaces the handler it installed before; handlers the
    host application attached to the root logger are left in place.

    Args:
        level: Root logger level name ("DEBUG", "INFO", ...). Unknown names fall
            back to INFO.
        json_output: Render JSON lines when True, coloured console lines otherwise.
        stream: Where to write. Defaults to ``sys.stderr`` at call time.
    """
    target = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(target)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_build_formatter(json_output, target))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def add_log_hook(hook: LogHook) -> None:
    """Call ``hook`` with a copy of every log event from now on.

    Hooks run inside the processor chain, before rendering. They are meant for
    metrics, alerting and test assertions; an exception raised by a hook is
    discarded.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister ``hook``; unknown hooks are ignored."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    _log_hooks.clear()
