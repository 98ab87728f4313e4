import pytest
from rest_framework.test import APIClient

from apps.parts.services import SIFormatter


@pytest.fixture
def client():
    """Return a DRF test client."""
    return APIClient()


@pytest.fixture
def formatter():
    """Formatter with the default [1, 1000) mantissa range."""
    return SIFormatter()
