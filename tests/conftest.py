"""
Pytest configuration and shared fixtures for proctor tests.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import pytest

from proctor.orchestration import ClassroomOrchestrator
from tests.fixtures.fakes import CallLog, FakeCatalog, FakeProvider, RecordingLogger


TEMPLATE_BODY = '{"Resources": {}}'


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def fake_catalog(call_log):
    return FakeCatalog(call_log)


@pytest.fixture
def fake_provider(call_log):
    return FakeProvider(call_log)


@pytest.fixture
def progress_log():
    return RecordingLogger()


@pytest.fixture
def orchestrator(fake_catalog, fake_provider, progress_log):
    """Orchestrator wired to recording fakes, configured for us-east-1."""
    return ClassroomOrchestrator(
        atlas_client=fake_catalog,
        aws_client=fake_provider,
        log=progress_log,
        box_name="cloudfoundry/bosh-lite",
        region="us-east-1",
        template=TEMPLATE_BODY,
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove PROCTOR_* variables so configuration tests are hermetic."""
    import os

    for key in list(os.environ):
        if key.startswith("PROCTOR_"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as fast unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that wire several layers together"
    )
