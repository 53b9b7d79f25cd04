"""
Shared fixtures for the mathhammer test suite.
"""

import os
import sys

import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from mathhammer import HitProfile, RerollPolicy, WoundProfile


@pytest.fixture
def basic_hits():
    """Six attacks hitting on 3+, no re-rolls or triggers (4 hits)."""
    return HitProfile(attacks=6, required_roll=3, reroll=RerollPolicy.NONE)


@pytest.fixture
def mortal_wound_trigger(basic_hits):
    """Strength 4 wounding that deals a mortal wound on each 6+."""
    return WoundProfile(
        hits=basic_hits.total_hits(),
        strength=4,
        trigger_threshold=6,
        extra_mortals_on_trigger=1,
    )
