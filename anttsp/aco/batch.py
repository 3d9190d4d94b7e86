from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from anttsp.aco.solver import AntSystemSolver


@dataclass
class BatchResult:
    best: object
    instances: int
    results: list


def run_instance(graph, config, seed=None):
    """One independent solver run; top-level so worker processes can pickle it."""
    if seed is not None:
        config = config.replace(random_seed=seed)
    return AntSystemSolver(graph, config).run()


def instance_seeds(config, instances):
    if config.random_seed is None:
        return [None] * instances
    return [config.random_seed + k for k in range(instances)]


def reduce_results(results):
    """Pick the minimum-length result; ties keep the earliest instance."""
    results = list(results)
    if not results:
        raise ValueError("no solver results to reduce")
    best = results[0]
    for result in results[1:]:
        if result.length < best.length:
            best = result
    return BatchResult(best=best, instances=len(results), results=results)


def run_batch(graph, config, instances=4, max_workers=None):
    """
    Run `instances` independent solvers on a process pool and reduce to the
    shortest tour. Results are ordered by instance index before reducing so
    that a seeded batch is reproducible.
    """
    if instances < 1:
        raise ValueError(f"instances must be >= 1, got {instances}")
    seeds = instance_seeds(config, instances)

    if max_workers == 1 or instances == 1:
        results = [run_instance(graph, config, s) for s in seeds]
        return reduce_results(results)

    results = [None] * instances
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(run_instance, graph, config, s): k for k, s in enumerate(seeds)}
        for future in as_completed(futures):
            k = futures[future]
            results[k] = future.result()  # re-raises worker errors
            if config.verbose:
                print(f"Instance {k} finished: length {results[k].length:.3f}")
    return reduce_results(results)


def format_result_line(result):
    return result.to_line()


def format_reduced(batch):
    return f"{batch.instances}\tTour: {batch.best.tour} Length: {batch.best.length!r}"
