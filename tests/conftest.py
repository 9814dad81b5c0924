"""Shared pytest fixtures and configuration for all tests."""

from __future__ import annotations

import pytest
from rich.console import Console

from vprok_price.term import ActivityLog, set_activity_log


@pytest.fixture(autouse=True)
def setup_activity_log() -> None:
  """Set up a quiet activity log context for all tests."""
  set_activity_log(ActivityLog())


@pytest.fixture
def recording_log() -> ActivityLog:
  """Verbose log whose output can be inspected with `log.console.export_text()`."""
  return ActivityLog(verbose=True, console=Console(record=True, width=200))


@pytest.fixture
def quiet_recording_log() -> ActivityLog:
  return ActivityLog(verbose=False, console=Console(record=True, width=200))
