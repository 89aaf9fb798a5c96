"""presult: algebraic error handling with Result and AsyncResult.

A Result is either Ok(value) or Err(error); AsyncResult carries the same
combinators over a pending computation.

Flat imports (preferred):
    from presult import Result, Ok, Err, AsyncResult
    from presult import from_throwable, from_awaitable, safe, safe_async

Submodule imports (for organization):
    from presult.result import Ok, Err, Result
    from presult.async_ import AsyncResult
    from presult.decorators import safe, safe_async
"""

# Configuration and logging
from presult._config import ResultConfig, get_config, init
from presult._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)

# Async
from presult.async_ import AsyncResult

# Capture boundaries
from presult.capture import (
    from_awaitable,
    from_throwable,
    is_cancellation,
    must_propagate,
)

# Decorators
from presult.decorators import safe, safe_async

# Errors
from presult.errors import (
    InvalidResultStateError,
    MissingErrorPayloadError,
    PResultError,
    SourceAbandonedError,
)
from presult.result import (
    Err,
    Ok,
    Result,
    err,
    ok,
    to_result,
)
from presult.state import ResultState

__all__ = [
    # Async
    'AsyncResult',
    # Result types
    'Err',
    # Errors
    'InvalidResultStateError',
    'MissingErrorPayloadError',
    'Ok',
    'PResultError',
    'Result',
    # Configuration
    'ResultConfig',
    'ResultState',
    'SourceAbandonedError',
    # Logging
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'err',
    # Capture
    'from_awaitable',
    'from_throwable',
    'get_config',
    'get_logger',
    'init',
    'is_cancellation',
    'must_propagate',
    'ok',
    'remove_log_hook',
    # Decorators
    'safe',
    'safe_async',
    'to_result',
]
