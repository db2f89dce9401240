"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
from typing import Iterator

import pytest
from hypothesis import HealthCheck, settings

from binio import CodecConfig, get_config, set_config

# default_config is function-scoped; it only needs to run once per test, not per example
settings.register_profile("binio", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("binio")


@pytest.fixture
def buffer() -> io.BytesIO:
    """Empty in-memory stream."""
    return io.BytesIO()


@pytest.fixture(autouse=True)
def default_config() -> Iterator[None]:
    """Run every test with the default configuration, whatever the environment says."""
    previous = get_config()
    set_config(CodecConfig())
    yield
    set_config(previous)
