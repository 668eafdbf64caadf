"""
pytest configuration and shared fixtures.
"""

import pytest

from pynpst.exact import DistributionContext


@pytest.fixture(scope="session")
def context():
    """All test-specific distributions, built once for the session."""
    return DistributionContext.create()
