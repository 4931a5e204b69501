"""Shared fixtures for Minitodo tests."""
from datetime import datetime

import pytest
import pytest_asyncio

from core import AppContext, bootstrap
from fakes import FakeClock, RecordingHost, RecordingSurface
from i18n import set_language
from services.host_bridge import HostUser

# Short timings so transitions finish well inside one settle()
RENDERER_TIMINGS = {
    "debounce_seconds": 0.001,
    "exit_seconds": 0.05,
    "stagger_seconds": 0.01,
    "complete_seconds": 0.05,
}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 2, 9, 0, 0))


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost(user=HostUser(id="42", first_name="Sam"))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest_asyncio.fixture
async def ctx(clock: FakeClock, host: RecordingHost, surface: RecordingSurface) -> AppContext:
    """Provide a fresh AppContext backed by an in-memory blob store.

    Every test gets its own store, event bus and renderer, so nothing leaks
    between tests.
    """
    context = await bootstrap(
        db_path=":memory:",
        host=host,
        surface=surface,
        clock=clock,
        **RENDERER_TIMINGS,
    )
    set_language("en")
    yield context
    await context.close()
