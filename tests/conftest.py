"""
Pytest configuration for activity lock tests.

This file adds the project root to the Python path so that tests can import
from the domain, repositories, services and interaction packages, and the
tests directory so that test modules can import the shared fakes.
"""

import sys
from pathlib import Path

import pytest

# Add the project directory to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

from fakes import (  # noqa: E402
    FakeActivityStore,
    FakeContactDirectory,
    FakeRelationshipStore,
    RecordingRenderer,
)


@pytest.fixture
def directory() -> FakeContactDirectory:
    return FakeContactDirectory()


@pytest.fixture
def activity_store() -> FakeActivityStore:
    return FakeActivityStore()


@pytest.fixture
def relationship_store() -> FakeRelationshipStore:
    return FakeRelationshipStore()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
