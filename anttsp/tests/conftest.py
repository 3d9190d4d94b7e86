import matplotlib
import pytest

matplotlib.use("Agg")

from anttsp.aco.graph import GraphModel

# 4x4 asymmetric example, offset +1 applied by GraphModel
FOUR_TOWNS = [
    [0, 2, 9, 10],
    [1, 0, 6, 4],
    [15, 7, 0, 8],
    [6, 3, 12, 0],
]

FIVE_TOWNS = [
    [0, 3, 4, 2, 7],
    [3, 0, 4, 6, 3],
    [4, 4, 0, 5, 8],
    [2, 6, 5, 0, 6],
    [7, 3, 8, 6, 0],
]


@pytest.fixture
def four_towns():
    return GraphModel(FOUR_TOWNS)


@pytest.fixture
def five_towns():
    return GraphModel(FIVE_TOWNS)


@pytest.fixture
def matrix_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("\n".join(" ".join(str(x) for x in row) for row in FIVE_TOWNS) + "\n")
    return path
