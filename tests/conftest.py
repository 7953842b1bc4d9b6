import pytest
from tests.test_utils import GameScenario


@pytest.fixture
def scenario():
    """Factory fixture to create scenarios."""

    def _builder(dragons_config, cards=None, **kwargs):
        return GameScenario(dragons_config, cards, **kwargs)

    return _builder
