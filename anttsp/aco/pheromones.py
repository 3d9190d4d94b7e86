import numpy as np


class PheromoneMatrix:
    def __init__(self, num_nodes, initial=1.0):
        self.num_nodes = num_nodes
        self.matrix = np.full((num_nodes, num_nodes), float(initial))

    def reset(self, c):
        self.matrix.fill(c)

    def evaporate(self, rho):
        self.matrix *= (1 - rho)

    def reinforce(self, tour, deposit):
        # directed edges, closing edge last -> first included
        tour_arr = np.asarray(tour, dtype=int)
        edges_a = tour_arr
        edges_b = np.roll(tour_arr, -1)
        np.add.at(self.matrix, (edges_a, edges_b), deposit)

    def strength(self, i, j):
        return float(self.matrix[i, j])

    def snapshot(self):
        return self.matrix.copy()

    def is_valid(self):
        return bool(np.isfinite(self.matrix).all() and (self.matrix >= 0).all())
