"""Pytest configuration and shared fixtures for presult tests."""

import pytest

from presult import _config
from presult._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def reset_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against the default, uninitialized configuration."""
    monkeypatch.setattr(_config, '_config', None)
    for name in ('PRESULT_LOG_LEVEL', 'PRESULT_LOG_FORMAT', 'PRESULT_LOG_CAPTURES'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cleanup_hooks():
    """Clear log hooks before and after a test."""
    clear_log_hooks()
    yield
    clear_log_hooks()


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from presult import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from presult import Err

    return Err(ValueError('test error'))


@pytest.fixture(params=['asyncio', 'trio'])
def anyio_backend(request: pytest.FixtureRequest) -> str:
    """Run anyio-marked tests on every supported backend."""
    return request.param
