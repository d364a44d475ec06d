import pytest

from queryflow.logging.filters import clear_request_context, set_logging_context
from queryflow.settings import _reload_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings around each test so environment overrides never leak."""
    _reload_settings()
    yield
    clear_request_context()
    set_logging_context(environment=None, extra=None)
    _reload_settings()


class RecordingLoader:
    """Minimal data loader double that counts dispatches."""

    def __init__(self, name: str = "loader"):
        self.name = name
        self.dispatch_count = 0

    def dispatch(self):
        self.dispatch_count += 1


@pytest.fixture
def recording_loader_factory():
    return RecordingLoader
