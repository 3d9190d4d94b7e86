import networkx as nx
import numpy as np
from anttsp.aco.graph import GraphLoadError


def build_metric_closure(G, required_nodes, weight="weight"):
    """
    Build metric closure for required nodes in G.

    Returns:
        cost_matrix: 2D NumPy array [i][j] = shortest distance from required_nodes[i] to required_nodes[j]
        shortest_paths: dict[(u, v)] = list of nodes representing shortest path from u to v
    """
    n = len(required_nodes)
    cost_matrix = np.zeros((n, n))
    shortest_paths = {}

    for i, u in enumerate(required_nodes):
        # Single-source shortest paths from u
        lengths, paths = nx.single_source_dijkstra(G, u, weight=weight)
        for j, v in enumerate(required_nodes):
            if i == j:
                continue
            if v not in lengths:
                raise GraphLoadError(f"no path from {u!r} to {v!r}; graph is not connected")
            cost_matrix[i][j] = lengths[v]
            shortest_paths[(u, v)] = paths[v]

    return cost_matrix, shortest_paths


def expand_tour(tour, required_nodes, shortest_paths):
    """Map a closed tour over closure indices back to a node path in the original graph."""
    full_path = []
    for k in range(len(tour)):
        u = required_nodes[tour[k]]
        v = required_nodes[tour[(k + 1) % len(tour)]]
        full_path.extend(shortest_paths[(u, v)][:-1])
    full_path.append(required_nodes[tour[0]])
    return full_path
