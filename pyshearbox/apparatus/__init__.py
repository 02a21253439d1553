"""Apparatus: test configuration, run state and the test runner."""

from pyshearbox.apparatus.config import TestConfig
from pyshearbox.apparatus.state import Phase, RunState
from pyshearbox.apparatus.runner import TestRunner

__all__ = [
    "TestConfig",
    "Phase",
    "RunState",
    "TestRunner",
]
