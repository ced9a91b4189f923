import pytest

from game.survival.engine import Game, InputSnapshot
from game.survival.utils import seed_everything


@pytest.fixture
def game():
    """A started 800x600 session with a fixed seed"""
    seed_everything(1234)
    g = Game(800, 600)
    g.start()
    return g


@pytest.fixture
def idle():
    return InputSnapshot()
