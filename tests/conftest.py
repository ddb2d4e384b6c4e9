"""Pytest configuration and fixtures for embedcheck tests."""

import pytest

from embedcheck.core.image_cache import ImageCheckCache

from .fakes import FakeClock, RecordingProber


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache() -> ImageCheckCache:
    return ImageCheckCache()


@pytest.fixture
def prober() -> RecordingProber:
    return RecordingProber()
