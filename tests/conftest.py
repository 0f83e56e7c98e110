"""Common test fixtures for panel-ai-action."""

import pytest

from panel_ai_action.agents import FakeAgentAction, reset_agent_backend, reset_job_queue, temporary_queue
from panel_ai_action.agents.runner import _validated_backend_ids
from panel_ai_action.testing import FakeJobQueue

from .support.stubs import RecordingBackend, StubRecord


@pytest.fixture(autouse=True)
def reset_agent_state():
    """Reset fakes, the backend and queue registrations, and validation tracking around each test."""
    FakeAgentAction.reset()
    reset_agent_backend()
    reset_job_queue()
    _validated_backend_ids.clear()
    StubRecord.store.clear()
    yield
    FakeAgentAction.reset()
    reset_agent_backend()
    reset_job_queue()
    _validated_backend_ids.clear()
    StubRecord.store.clear()


@pytest.fixture
def backend() -> RecordingBackend:
    """A recording backend; register it explicitly in tests that need it."""
    return RecordingBackend()


@pytest.fixture
def fake_queue():
    """A FakeJobQueue registered for the duration of the test."""
    queue = FakeJobQueue()
    with temporary_queue(queue):
        yield queue


@pytest.fixture
def record() -> StubRecord:
    return StubRecord(id=1, title="Quarterly report")
