from dataclasses import dataclass, field
from anttsp.aco.config import RunConfig
from anttsp.aco.engine import Colony, make_executor


@dataclass
class SolverResult:
    tour: list
    length: float
    iterations: int
    history: list = field(default_factory=list)

    def to_line(self):
        """`[t0, t1, ...] length` as emitted by one batch instance."""
        return f"{self.tour} {self.length!r}"


class AntSystemSolver:
    """
    Runs the colony for a fixed iteration budget from a cold pheromone
    field and returns the shortest tour seen.
    """

    def __init__(self, graph, config=None, keep_snapshots=False):
        self.graph = graph
        self.config = config if config is not None else RunConfig()
        self.keep_snapshots = keep_snapshots
        self.pheromone_snapshots = []
        self.best_length_history = []

    def run(self):
        cfg = self.config
        executor = make_executor(cfg.workers)
        try:
            colony = Colony(self.graph, cfg, executor=executor)
            colony.reset()
            self.colony = colony
            self.best_length_history = []
            self.pheromone_snapshots = []

            since_improvement = 0
            iteration = 0
            while iteration < cfg.iterations:
                iteration += 1
                if colony.run_iteration():
                    since_improvement = 0
                else:
                    since_improvement += 1
                self.best_length_history.append(colony.best_length)
                if self.keep_snapshots:
                    self.pheromone_snapshots.append(colony.pheromones.snapshot())

                last = iteration == cfg.iterations
                stop = cfg.early_stop is not None and since_improvement >= cfg.early_stop
                if cfg.verbose and (iteration % cfg.log_interval == 0 or last or stop):
                    print(f"Iteration {iteration}: Best length {colony.best_length:.3f}")
                if stop:
                    if cfg.verbose:
                        print(f"No improvement for {since_improvement} iterations, stopping early")
                    break
        finally:
            if executor is not None:
                executor.shutdown()

        return SolverResult(
            tour=list(colony.best_tour),
            length=colony.best_length,
            iterations=iteration,
            history=list(self.best_length_history),
        )


def solve(graph, config=None, **overrides):
    """Convenience wrapper: `solve(graph, iterations=100, random_seed=1)`."""
    cfg = config if config is not None else RunConfig()
    if overrides:
        cfg = cfg.replace(**overrides)
    return AntSystemSolver(graph, cfg).run()
