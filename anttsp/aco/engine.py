import numpy as np
from concurrent.futures import ThreadPoolExecutor
from anttsp.aco.ant import Ant
from anttsp.aco.fastpow import get_power
from anttsp.aco.pheromones import PheromoneMatrix


class Colony:
    """
    Fixed pool of ants plus the pheromone field they share.

    One call to run_iteration performs setup, lock-step construction,
    evaporation + reinforcement and best-tour tracking, in that order.
    The field is only written during the update phase.
    """

    def __init__(self, graph, config, executor=None):
        self.graph = graph
        self.config = config
        self.num_nodes = graph.size()
        self.num_ants = config.num_ants(self.num_nodes)
        self.power = get_power(config.power)
        self.pheromones = PheromoneMatrix(self.num_nodes, config.pheromone_init)
        self.executor = executor

        # one independent stream per ant so threaded construction stays reproducible
        seeds = np.random.SeedSequence(config.random_seed).spawn(self.num_ants)
        self.ants = [Ant(self.num_nodes, np.random.default_rng(s)) for s in seeds]

        self.best_tour = None
        self.best_length = float('inf')

    def reset(self):
        self.pheromones.reset(self.config.pheromone_init)
        self.best_tour = None
        self.best_length = float('inf')

    # ---------- phases ----------

    def setup_ants(self):
        for ant in self.ants:
            ant.start()

    def move_ants(self):
        trails = self.pheromones.matrix
        distances = self.graph.matrix
        cfg = self.config

        def advance(ant, step):
            return ant.step(step, trails, distances, cfg.alpha, cfg.beta, cfg.exploration_rate, self.power)

        for step in range(1, self.num_nodes):
            if self.executor is None:
                for ant in self.ants:
                    advance(ant, step)
            else:
                # consuming the map is the barrier between steps
                list(self.executor.map(advance, self.ants, [step] * self.num_ants))

        for ant in self.ants:
            assert ant.is_complete()
            ant.tour_length = self.graph.tour_length(ant.tour)

    def update_trails(self):
        self.pheromones.evaporate(self.config.evaporation)
        for ant in self.ants:
            self.pheromones.reinforce(ant.tour, self.config.q / ant.tour_length)

    def update_best(self):
        iter_best = None
        for ant in self.ants:
            if iter_best is None or ant.tour_length < iter_best.tour_length:
                iter_best = ant

        improved = iter_best.tour_length < self.best_length
        if improved:
            self.best_length = iter_best.tour_length
            self.best_tour = iter_best.completed_tour()
        return improved

    def run_iteration(self):
        """Run one full iteration; returns True when the best tour improved."""
        self.setup_ants()
        self.move_ants()
        self.update_trails()
        return self.update_best()


def make_executor(workers):
    if workers <= 1:
        return None
    return ThreadPoolExecutor(max_workers=workers)
