import pickle
import networkx as nx
import numpy as np
from pathlib import Path
from anttsp.aco.closure import build_metric_closure
from anttsp.aco.graph import GraphLoadError, GraphModel

# ------------------ Distance matrices ------------------

def parse_matrix(content):
    """Parse rows of whitespace-separated numbers into a list of float rows."""
    rows = []
    for lineno, line in enumerate(content.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            rows.append([float(tok) for tok in tokens])
        except ValueError as exc:
            raise GraphLoadError(f"line {lineno}: {exc}") from exc

    if not rows:
        raise GraphLoadError("no matrix rows found")
    width = len(rows[0])
    for lineno, row in enumerate(rows, start=1):
        if len(row) != width:
            raise GraphLoadError(f"row {lineno} has {len(row)} values, expected {width}")
    if width != len(rows):
        raise GraphLoadError(f"matrix is {len(rows)}x{width}, expected a square matrix")
    return rows


def read_text(path):
    with open(Path(path), "r", encoding="utf-8") as f:
        try:
            return f.read()
        except UnicodeDecodeError as exc:
            raise GraphLoadError(f"{path}: not a UTF-8 text file: {exc}") from exc


def load_matrix(path):
    return parse_matrix(read_text(path))


def load_graph(path, offset=1.0, tsplib=False):
    """Load a solver graph from a whitespace matrix file (or a TSPLIB file)."""
    if tsplib:
        data = parse_tsplib(read_text(path))
        return GraphModel(data["distances"], offset=offset)
    return GraphModel.from_matrix(load_matrix(path), offset=offset)

# ------------------ TSPLIB coordinates ------------------

def parse_tsplib(content):
    """Parse TSPLIB format file content."""
    lines = content.strip().split('\n')

    # Parse header
    metadata = {}
    i = 0
    while i < len(lines) and not lines[i].strip().startswith('NODE_COORD_SECTION'):
        if ':' in lines[i]:
            key, value = lines[i].split(':', 1)
            metadata[key.strip()] = value.strip()
        i += 1
    if i == len(lines):
        raise GraphLoadError("missing NODE_COORD_SECTION")

    # Parse coordinates
    i += 1
    coords = []
    while i < len(lines) and not lines[i].strip().startswith('EOF'):
        parts = lines[i].strip().split()
        if len(parts) >= 3:
            # Format: node_id x y
            try:
                coords.append([float(parts[1]), float(parts[2])])
            except ValueError as exc:
                raise GraphLoadError(f"bad coordinate line {lines[i]!r}") from exc
        i += 1

    coordinates = np.array(coords)
    return {
        'metadata': metadata,
        'coordinates': coordinates,
        'n_nodes': len(coords),
        'distances': euclidean_matrix(coordinates),
    }


def euclidean_matrix(coords):
    coords = np.asarray(coords, dtype=float)
    if coords.ndim != 2 or len(coords) == 0:
        raise GraphLoadError("no coordinates")
    diff = coords[:, None, :] - coords[None, :, :]
    return np.linalg.norm(diff, axis=-1)

# ------------------ NetworkX graphs ------------------

def load_pickled_graph(pkl_path):
    with open(pkl_path, "rb") as f:
        try:
            G = pickle.load(f)
        except (pickle.UnpicklingError, EOFError) as exc:
            raise GraphLoadError(f"{pkl_path}: not a pickled graph: {exc}") from exc
    if not isinstance(G, nx.Graph):
        raise GraphLoadError(f"{pkl_path}: expected a networkx graph, got {type(G).__name__}")
    # Convert to undirected (NetworkX preserves all attributes)
    if G.is_directed():
        G = G.to_undirected()
    return G


def graph_from_networkx(G, nodes=None, weight="weight", offset=1.0):
    """
    Solver graph over `nodes` (all nodes by default) using shortest-path
    distances in G. Returns the GraphModel together with the node order
    and the shortest paths needed to expand a tour back onto G.
    """
    required_nodes = list(nodes) if nodes is not None else list(G.nodes())
    missing = [n for n in required_nodes if n not in G]
    if missing:
        raise GraphLoadError(f"nodes not in graph: {missing}")
    cost_matrix, shortest_paths = build_metric_closure(G, required_nodes, weight=weight)
    return GraphModel(cost_matrix, offset=offset), required_nodes, shortest_paths
