"""
Pytest configuration and shared fixtures for the assessment service tests.

Testing Standards:
- All async tests use pytest.mark.asyncio
- Use AsyncMock for async port mocking
- Unit tests go in tests/unit/
- Scenario tests over the in-memory stubs go in tests/integration/
"""

from datetime import datetime, timezone

import pytest

from tests.helpers import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time frozen at 2025-06-01T00:00Z."""
    return FakeTimeAuthority(frozen_at=datetime(2025, 6, 1, tzinfo=timezone.utc))
