import numpy as np
import pytest
from anttsp.aco.ant import Ant, transition_probabilities
from anttsp.aco.fastpow import fast_pow


class ScriptedRng:
    """Stand-in generator replaying fixed draws."""

    def __init__(self, randoms=(), integers=()):
        self.randoms = list(randoms)
        self.ints = list(integers)

    def random(self):
        return self.randoms.pop(0)

    def integers(self, high):
        value = self.ints.pop(0)
        assert 0 <= value < high
        return value


def build_tour(ant, graph, trails, alpha=1.0, beta=5.0, exploration_rate=0.01, power=None):
    kwargs = {} if power is None else {"power": power}
    ant.start()
    for step in range(1, graph.size()):
        ant.step(step, trails, graph.matrix, alpha, beta, exploration_rate, **kwargs)
    return ant.completed_tour()


def test_alpha_zero_probabilities_match_closed_form(four_towns):
    # trails are irrelevant when alpha == 0
    trails = np.random.default_rng(3).uniform(0.1, 9.0, size=(4, 4))
    visited = np.array([True, False, False, False])
    probs = transition_probabilities(0, visited, trails, four_towns.matrix, alpha=0.0, beta=5.0)

    # row 0 after the +1 offset: [1, 3, 10, 11]
    w = {1: 3.0 ** -5, 2: 10.0 ** -5, 3: 11.0 ** -5}
    total = sum(w.values())
    assert probs[0] == 0.0
    for town, weight in w.items():
        assert probs[town] == pytest.approx(weight / total, rel=1e-12)
    assert probs.sum() == pytest.approx(1.0)


def test_probabilities_from_a_later_step(four_towns):
    trails = np.ones((4, 4))
    visited = np.array([False, True, True, False])
    probs = transition_probabilities(2, visited, trails, four_towns.matrix, alpha=0.0, beta=5.0)
    # row 2 after the offset: [16, 8, 1, 9]
    w0, w3 = 16.0 ** -5, 9.0 ** -5
    assert probs[0] == pytest.approx(w0 / (w0 + w3))
    assert probs[3] == pytest.approx(w3 / (w0 + w3))
    assert probs[1] == probs[2] == 0.0


def test_trails_weight_probabilities(four_towns):
    trails = np.ones((4, 4))
    trails[0, 3] = 4.0
    visited = np.array([True, False, False, False])
    probs = transition_probabilities(0, visited, trails, four_towns.matrix, alpha=1.0, beta=0.0)
    assert probs[1:] == pytest.approx([1 / 6, 1 / 6, 4 / 6])


def test_degenerate_normaliser_returns_none():
    visited = np.array([True, False, False])
    zero_trails = np.zeros((3, 3))
    distances = np.full((3, 3), 2.0)
    assert transition_probabilities(0, visited, zero_trails, distances, alpha=1.0, beta=1.0) is None

    tiny = np.full((3, 3), 1e-10)
    assert transition_probabilities(0, visited, np.ones((3, 3)), tiny, alpha=1.0, beta=40.0) is None


def test_tour_is_a_permutation(five_towns):
    trails = np.ones((5, 5))
    for seed in range(20):
        ant = Ant(5, np.random.default_rng(seed))
        tour = build_tour(ant, five_towns, trails)
        assert sorted(tour) == list(range(5))
        assert ant.is_complete()


def test_buffers_are_reused_across_iterations(five_towns):
    ant = Ant(5, np.random.default_rng(0))
    tour_buffer, visited_buffer = ant.tour, ant.visited
    trails = np.ones((5, 5))
    build_tour(ant, five_towns, trails)
    build_tour(ant, five_towns, trails)
    assert ant.tour is tour_buffer
    assert ant.visited is visited_buffer
    assert ant.visited.all()


def test_full_exploration_is_uniform_rank_selection(five_towns):
    ant = Ant(5, np.random.default_rng(11))
    tour = build_tour(ant, five_towns, np.ones((5, 5)), exploration_rate=1.0)

    ref = np.random.default_rng(11)
    expected = [int(ref.integers(5))]
    for _ in range(4):
        ref.random()
        unvisited = [t for t in range(5) if t not in expected]
        expected.append(unvisited[int(ref.integers(len(unvisited)))])
    assert tour == expected


def test_roulette_picks_first_town_reaching_r(four_towns):
    rng = ScriptedRng(randoms=[0.5, 0.0])
    ant = Ant(4, rng)
    ant.visit(1, 0)
    # r = 0 lands on the lowest-index unvisited town
    town = ant.choose_next_node(np.ones((4, 4)), four_towns.matrix, 1.0, 5.0, 0.01)
    assert town == 0


def test_roulette_scans_in_index_order():
    distances = np.full((4, 4), 2.0)
    ant = Ant(4, ScriptedRng(randoms=[0.9, 0.6]))
    ant.visit(2, 0)
    # equal thirds over towns 0, 1, 3; running sums 1/3, 2/3, 1
    town = ant.choose_next_node(np.ones((4, 4)), distances, 1.0, 1.0, 0.0)
    assert town == 1


def test_rounding_shortfall_selects_last_unvisited(four_towns):
    ant = Ant(4, ScriptedRng(randoms=[0.5, 1.5]))
    ant.visit(3, 0)
    town = ant.choose_next_node(np.ones((4, 4)), four_towns.matrix, 1.0, 5.0, 0.0)
    assert town == 2


def test_exploration_draw_uses_rank_among_unvisited(four_towns):
    ant = Ant(4, ScriptedRng(randoms=[0.001], integers=[1]))
    ant.visit(0, 0)
    ant.visited[2] = True  # pretend town 2 is taken
    town = ant.choose_next_node(np.ones((4, 4)), four_towns.matrix, 1.0, 5.0, 0.01)
    assert town == 3


def test_zero_normaliser_falls_back_to_uniform(four_towns):
    ant = Ant(4, ScriptedRng(randoms=[0.9], integers=[2]))
    ant.visit(1, 0)
    town = ant.choose_next_node(np.zeros((4, 4)), four_towns.matrix, 1.0, 5.0, 0.01)
    assert town == 3


def test_lock_step_is_enforced(four_towns):
    ant = Ant(4, np.random.default_rng(0))
    ant.start()
    with pytest.raises(AssertionError):
        ant.visit(ant.random_unvisited(), 2)


def test_fast_power_still_builds_permutations(five_towns):
    ant = Ant(5, np.random.default_rng(5))
    tour = build_tour(ant, five_towns, np.ones((5, 5)), power=fast_pow)
    assert sorted(tour) == list(range(5))
