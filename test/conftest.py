"""
Test Configuration and Fixtures

Architecture:
- Unit tests (test/**/unit/): use cases against a mocked unit of work, see their conftest.py
- Integration tests: the test app on in-memory SQLite, one fresh database per client
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks read these at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
    os.environ['RESERVATION_SWEEP_INTERVAL_SECONDS'] = '3600'
    os.environ.pop('OTEL_EXPORTER_OTLP_ENDPOINT', None)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from typing import Dict, Optional  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from test.constants import (  # noqa: E402
    ADMIN_ID,
    BUYER_ID,
    ORGANIZER_USER_ID,
    STAFF_ID,
)


@pytest.fixture(autouse=True)
def reset_container_singletons() -> Generator[None, None, None]:
    """Inventory locks are bound to the loop that created them"""
    container.reset_singletons()
    yield
    container.reset_singletons()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app) as test_client:
        yield test_client


def auth_headers(user_id: Optional[str], role: str = 'user') -> Dict[str, str]:
    headers = {'X-User-Role': role}
    if user_id is not None:
        headers['X-User-Id'] = user_id
    return headers


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return auth_headers(ADMIN_ID, 'admin')


@pytest.fixture
def staff_headers() -> Dict[str, str]:
    return auth_headers(STAFF_ID, 'staff')


@pytest.fixture
def organizer_headers() -> Dict[str, str]:
    return auth_headers(ORGANIZER_USER_ID, 'organizer')


@pytest.fixture
def buyer_headers() -> Dict[str, str]:
    return auth_headers(BUYER_ID, 'user')
