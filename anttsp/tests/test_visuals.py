import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
import pytest
from anttsp.aco.pheromone_heatmap import convergence_plot, pheromone_composite, pheromone_heatmap
from anttsp.aco.visualizer import draw_tour


def test_heatmap_saved(tmp_path):
    path = tmp_path / "heat.png"
    fig = pheromone_heatmap(np.eye(4), save_path=str(path))
    assert path.exists()
    plt.close(fig)


def test_composite_and_empty_input(tmp_path):
    fig = pheromone_composite([np.ones((3, 3)), np.zeros((3, 3))])
    image = fig.axes[0].images[0].get_array()
    assert np.allclose(image, 0.5)
    plt.close(fig)
    with pytest.raises(ValueError):
        pheromone_composite([])


def test_convergence_plot(tmp_path):
    path = tmp_path / "conv.png"
    fig = convergence_plot([10.0, 9.0, 9.0, 7.0], save_path=str(path))
    assert path.exists()
    line = fig.axes[0].lines[0]
    assert list(line.get_ydata()) == [10.0, 9.0, 9.0, 7.0]
    plt.close(fig)


def test_draw_tour_closes_the_cycle(four_towns):
    fig = draw_tour(four_towns, [0, 2, 1, 3])
    assert isinstance(fig, go.Figure)
    tour_trace = fig.data[0]
    # three entries per edge (x0, x1, None), wrap edge included
    assert len(tour_trace.x) == 12
    # 0->2 (10) + 2->1 (8) + 1->3 (5) + 3->0 (7)
    assert fig.layout.title.text == "Best Tour - Length: 30.00"


def test_draw_tour_with_coordinates(four_towns, tmp_path):
    pos = {0: (0, 0), 1: (1, 0), 2: (1, 1), 3: (0, 1)}
    html = tmp_path / "tour.html"
    fig = draw_tour(four_towns, [0, 1, 2, 3], pos=pos, html_path=str(html))
    assert list(fig.data[2].x) == [0]
    assert html.exists()
