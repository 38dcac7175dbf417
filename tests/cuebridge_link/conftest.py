"""
Pytest fixtures for cuebridge_link tests.

Every context here runs on a ManualTimer and MockBackend: no ports,
no sockets, no real delays.
"""

from __future__ import annotations

import pytest
from mocks import ManualTimer, MockBackend, MockScriptRunner

from cuebridge_link import (
    BridgeContext,
    FeedbackListener,
    PendingLedger,
    ToolDispatcher,
    create_context,
)


@pytest.fixture
def timer() -> ManualTimer:
    """Create a fresh ManualTimer at t=0."""
    return ManualTimer()


@pytest.fixture
def ledger(timer: ManualTimer) -> PendingLedger:
    return PendingLedger(timer)


@pytest.fixture
def listener(ledger: PendingLedger) -> FeedbackListener:
    return FeedbackListener(ledger)


@pytest.fixture
def backend() -> MockBackend:
    """MIDI-profile mock backend with a feedback channel."""
    return MockBackend()


@pytest.fixture
def script_runner() -> MockScriptRunner:
    return MockScriptRunner()


@pytest.fixture
def context(
    backend: MockBackend,
    timer: ManualTimer,
    script_runner: MockScriptRunner,
) -> BridgeContext:
    """BridgeContext wired around the mocks (3000 ms timeout, 500/1000 ms grace)."""
    return create_context(backend, timer=timer, script_runner=script_runner)


@pytest.fixture
def dispatcher(context: BridgeContext) -> ToolDispatcher:
    return ToolDispatcher(context)
