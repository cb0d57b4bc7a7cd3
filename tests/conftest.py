import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def corridor():
    from chalkmaze.maze.grid import Grid

    return Grid.from_lines(
        [
            "#####",
            "#S.E#",
            "#####",
        ]
    )


@pytest.fixture
def maze11():
    from chalkmaze.maze.generator import generate_maze

    return generate_maze(11, 11, seed=1234)
