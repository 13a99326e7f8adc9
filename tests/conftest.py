"""Shared pytest configuration and fixtures for the test suite."""

import logging

import pytest

from research_study import ResearchStudy


@pytest.fixture
def study():
    """An empty study with a string id."""
    return ResearchStudy("NCT00000001")


@pytest.fixture
def populated_study():
    """A study with one contact, two sites and parsed conditions."""
    s = ResearchStudy(7)
    s.title = "Example Oncology Trial"
    s.add_conditions("Breast Cancer, HER2+")
    s.add_contact("Trial Office", "555-0100", "trials@example.org")
    s.add_site("Foo Clinic", "555-1234")
    s.add_site("Bar Hospital", email="bar@example.org")
    return s


@pytest.fixture
def _reset_root_logger():
    """Restore root logger handlers after a test reconfigures logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.level = original_level
