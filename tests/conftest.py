import os
import random
from unittest.mock import MagicMock

import pytest

# headless pygame for the front-end and env modules
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from gridblob.config import Config
from gridblob.game import GameSession
from gridblob.grid import Grid


@pytest.fixture
def grid():
    return Grid(400, 400, 20)


@pytest.fixture
def timer():
    return MagicMock()


@pytest.fixture
def session(grid, timer):
    """A started 20x20-cell session with a mock tick timer."""
    s = GameSession(grid=grid, config=Config(), rng=random.Random(1234))
    s.start(timer)
    return s
