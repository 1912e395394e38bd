"""
Pytest configuration and common fixtures for Bing Maps replay tests.
"""

from typing import Dict

import pytest

from tests.bing_maps.golden import GoldenDataScenario, loadScenarios


@pytest.fixture(scope="session")
def goldenScenarios() -> Dict[str, GoldenDataScenario]:
    """
    Recorded Bing Maps scenarios, keyed by file name without extension.

    Returns:
        Dict[str, GoldenDataScenario]: Loaded scenarios
    """
    return loadScenarios()
