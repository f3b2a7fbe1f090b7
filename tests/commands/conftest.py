"""Fixtures for CLI command tests."""

from __future__ import annotations

import pytest

from tests.conftest import SH, FakeInvoker


@pytest.fixture
def fake_runtime(monkeypatch: pytest.MonkeyPatch, invoker: FakeInvoker) -> FakeInvoker:
    """Route ``interop run`` spawns to the fake invoker under /bin/sh."""
    monkeypatch.setattr("interop.services.invocation.SubprocessInvoker", lambda: invoker)
    monkeypatch.setattr("interop.services.invocation.detect_shell", lambda: SH)
    return invoker
