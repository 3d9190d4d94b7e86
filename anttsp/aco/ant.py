import numpy as np
from anttsp.aco.fastpow import exact_pow


def transition_probabilities(current, visited, trails, distances, alpha, beta, power=exact_pow):
    """
    Selection probabilities from `current` to every town.

    Visited towns get 0. Returns None when the normaliser is zero or not
    finite, in which case the caller falls back to a uniform draw.
    """
    unvisited = ~visited
    weights = power(trails[current, unvisited], alpha) * power(1.0 / distances[current, unvisited], beta)
    denom = weights.sum()
    if not np.isfinite(denom) or denom <= 0:
        return None
    probs = np.zeros(len(visited))
    probs[unvisited] = weights / denom
    return probs


class Ant:
    """One agent of the colony with a reusable tour buffer.

    The buffers are allocated once per ant and cleared at the start of
    every iteration.
    """

    def __init__(self, num_nodes, rng):
        self.num_nodes = num_nodes
        self.rng = rng
        self.tour = np.zeros(num_nodes, dtype=int)
        self.visited = np.zeros(num_nodes, dtype=bool)
        self.steps = 0
        self.tour_length = float("inf")

    @property
    def current_node(self):
        return int(self.tour[self.steps - 1])

    def is_complete(self):
        return self.steps == self.num_nodes

    def reset(self):
        self.visited.fill(False)
        self.steps = 0
        self.tour_length = float("inf")

    def start(self):
        self.reset()
        self.visit(int(self.rng.integers(self.num_nodes)), 0)

    def visit(self, town, step):
        assert step == self.steps, "ants must advance in lock-step"
        assert not self.visited[town]
        self.tour[step] = town
        self.visited[town] = True
        self.steps += 1

    def random_unvisited(self):
        # rank-th unvisited town in index order
        unvisited = np.flatnonzero(~self.visited)
        rank = int(self.rng.integers(len(unvisited)))
        return int(unvisited[rank])

    def choose_next_node(self, trails, distances, alpha, beta, exploration_rate, power=exact_pow):
        if self.rng.random() < exploration_rate:
            return self.random_unvisited()

        probs = transition_probabilities(
            self.current_node, self.visited, trails, distances, alpha, beta, power
        )
        if probs is None:
            return self.random_unvisited()

        # Roulette wheel over unvisited towns in index order
        unvisited = np.flatnonzero(~self.visited)
        cum_probs = np.cumsum(probs[unvisited])
        r = self.rng.random()
        selected_index = int(np.searchsorted(cum_probs, r, side="left"))
        if selected_index == len(unvisited):
            # rounding left the running sum below r
            selected_index = len(unvisited) - 1
        return int(unvisited[selected_index])

    def step(self, step, trails, distances, alpha, beta, exploration_rate, power=exact_pow):
        town = self.choose_next_node(trails, distances, alpha, beta, exploration_rate, power)
        self.visit(town, step)
        return town

    def completed_tour(self):
        assert self.is_complete()
        return [int(t) for t in self.tour]
