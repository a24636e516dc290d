"""
Shared fixtures.
"""

import pytest

from tests.helpers import ScriptedCompletionStrategy


@pytest.fixture
def scripted():
    """Factory for scripted completion strategies."""
    return ScriptedCompletionStrategy


@pytest.fixture
def no_sleep():
    """Records retry delays instead of sleeping."""
    delays = []

    def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
