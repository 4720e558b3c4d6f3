"""Shared fixtures for the audit tests."""

import pytest

from tests.helpers import build_page


@pytest.fixture
def make_page():
    return build_page
