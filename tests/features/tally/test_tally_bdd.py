"""BDD tests for the per-address tally.

Step definitions are in conftest.py.
"""

import pytest
from pytest_bdd import scenarios

# Load all tally feature scenarios
scenarios(".")

pytestmark = [
    pytest.mark.core,
    pytest.mark.tier(1),
]
