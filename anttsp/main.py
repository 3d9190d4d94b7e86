# ----------------- main.py -----------------
import argparse
import sys
from pathlib import Path
from anttsp.aco.batch import format_reduced, run_batch
from anttsp.aco.config import DEFAULT_CONFIG, ConfigError, RunConfig
from anttsp.aco.graph import GraphLoadError
from anttsp.aco.solver import AntSystemSolver
from anttsp.aco.closure import expand_tour
from anttsp.datasets.graphloader import graph_from_networkx, load_graph, load_pickled_graph


def build_argparser():
    p = argparse.ArgumentParser(
        prog="anttsp",
        description="Ant System solver for (asymmetric) TSP distance matrices.",
    )
    p.add_argument("graph", help="Distance matrix file: rows of whitespace-separated numbers")
    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument("--tsplib", action="store_true", help="Read GRAPH as a TSPLIB coordinate file")
    fmt.add_argument("--pickled", action="store_true",
                     help="Read GRAPH as a pickled networkx graph; tours are over shortest paths")
    p.add_argument("--weight", default="weight", help="Edge attribute used as distance with --pickled")
    p.add_argument("--config", default=str(DEFAULT_CONFIG), help="YAML run configuration")

    aco = p.add_argument_group("ACO parameters (override the config file)")
    aco.add_argument("--iterations", type=int)
    aco.add_argument("--alpha", type=float, help="Trail influence")
    aco.add_argument("--beta", type=float, help="Influence of 1/distance")
    aco.add_argument("--evaporation", type=float, help="Evaporation rate in [0, 1)")
    aco.add_argument("--q", type=float, help="Deposit scale Q")
    aco.add_argument("--pheromone-init", type=float, help="Initial trail strength")
    aco.add_argument("--exploration-rate", type=float, help="Probability of a uniform random move")
    aco.add_argument("--ant-factor", type=float, dest="ant_count_factor", help="Ants per town")
    aco.add_argument("--ants", type=int, help="Explicit number of ants")
    aco.add_argument("--seed", type=int, dest="random_seed")
    aco.add_argument("--offset", type=float, dest="distance_offset", help="Added to every distance")
    aco.add_argument("--power", choices=["exact", "fast"])
    aco.add_argument("--workers", type=int, help="Threads per construction step")
    aco.add_argument("--early-stop", type=int, help="Stop after N iterations without improvement")
    aco.add_argument("--verbose", action="store_true", default=None)

    run = p.add_argument_group("Batch")
    run.add_argument("--instances", type=int, default=1, help="Independent solver instances")
    run.add_argument("--processes", type=int, default=None, help="Worker processes for --instances")

    out = p.add_argument_group("Output")
    out.add_argument("--save-best", help="Write the best tour to a text file")
    out.add_argument("--plot", help="Save the convergence plot (png)")
    out.add_argument("--heatmap", help="Save the final pheromone heatmap (png)")
    out.add_argument("--html", help="Save an interactive tour figure (html)")
    return p


def build_config(args):
    cfg = RunConfig.from_yaml(args.config)
    return cfg.replace(
        iterations=args.iterations,
        alpha=args.alpha,
        beta=args.beta,
        evaporation=args.evaporation,
        q=args.q,
        pheromone_init=args.pheromone_init,
        exploration_rate=args.exploration_rate,
        ant_count_factor=args.ant_count_factor,
        ants=args.ants,
        random_seed=args.random_seed,
        distance_offset=args.distance_offset,
        power=args.power,
        workers=args.workers,
        early_stop=args.early_stop,
        verbose=args.verbose,
    )


def main(argv=None):
    parser = build_argparser()
    args = parser.parse_args(argv)
    if args.instances < 1:
        parser.error(f"--instances must be >= 1, got {args.instances}")
    if args.processes is not None and args.processes < 1:
        parser.error(f"--processes must be >= 1, got {args.processes}")
    if args.heatmap and args.instances > 1:
        parser.error("--heatmap is only available for single-instance runs")

    expansion = None
    try:
        cfg = build_config(args)
        if args.pickled:
            G = load_pickled_graph(args.graph)
            graph, nodes, paths = graph_from_networkx(G, weight=args.weight, offset=cfg.distance_offset)
            expansion = (nodes, paths)
        else:
            graph = load_graph(args.graph, offset=cfg.distance_offset, tsplib=args.tsplib)
    except (ConfigError, GraphLoadError, OSError) as exc:
        print(f"anttsp: error: {exc}", file=sys.stderr)
        return 2

    if args.instances > 1:
        batch = run_batch(graph, cfg, instances=args.instances, max_workers=args.processes)
        result = batch.best
        print(format_reduced(batch))
        solver = None
    else:
        solver = AntSystemSolver(graph, cfg)
        result = solver.run()
        print(result.to_line())

    print(f"Best tour: {' -> '.join(map(str, result.tour))}")
    print(f"Length: {result.length:.3f} ({result.iterations} iterations)")
    if expansion is not None:
        nodes, paths = expansion
        print(f"Graph path: {' -> '.join(map(str, expand_tour(result.tour, nodes, paths)))}")

    if args.save_best:
        Path(args.save_best).write_text(" ".join(map(str, result.tour)) + "\n", encoding="utf-8")
        print(f"Saved: {args.save_best}")
    if args.plot:
        from anttsp.aco.pheromone_heatmap import convergence_plot
        convergence_plot(result.history, save_path=args.plot)
    if args.heatmap:
        from anttsp.aco.pheromone_heatmap import pheromone_heatmap
        pheromone_heatmap(solver.colony.pheromones.snapshot(), save_path=args.heatmap)
    if args.html:
        from anttsp.aco.visualizer import draw_tour
        draw_tour(graph, result.tour, html_path=args.html)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
