import numpy as np


class GraphLoadError(ValueError):
    pass


class GraphModel:
    """
    Immutable distance matrix for one solver run.

    `offset` is added to every entry at construction so that every edge
    weight is strictly positive; selection divides by distance.
    """

    def __init__(self, distances, offset=1.0):
        try:
            matrix = np.array(distances, dtype=float)
        except (TypeError, ValueError) as exc:
            raise GraphLoadError(f"distance matrix is not numeric: {exc}") from exc

        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise GraphLoadError(f"distance matrix must be square, got shape {matrix.shape}")
        if matrix.shape[0] < 2:
            raise GraphLoadError(f"need at least 2 towns, got {matrix.shape[0]}")
        if not np.isfinite(matrix).all():
            raise GraphLoadError("distance matrix contains non-finite values")
        if (matrix < 0).any():
            raise GraphLoadError("distance matrix contains negative distances")
        if not (np.isfinite(offset) and offset > 0):
            raise GraphLoadError(f"distance offset must be positive, got {offset}")

        matrix += offset
        matrix.setflags(write=False)
        self.matrix = matrix
        self.offset = float(offset)
        self.num_nodes = matrix.shape[0]

    @classmethod
    def from_matrix(cls, rows, offset=1.0):
        """Build from a list of rows; ragged rows are rejected."""
        rows = [list(r) for r in rows]
        if any(len(r) != len(rows) for r in rows):
            lengths = sorted({len(r) for r in rows})
            raise GraphLoadError(f"{len(rows)} rows with lengths {lengths}; matrix must be square")
        return cls(rows, offset=offset)

    def size(self):
        return self.num_nodes

    def distance(self, i, j):
        return float(self.matrix[i, j])

    def tour_length(self, tour):
        """Length of the closed tour, wrap edge from last back to first included."""
        tour_np = np.asarray(tour, dtype=int)
        assert len(tour_np) == self.num_nodes
        edges = self.matrix[tour_np, np.roll(tour_np, -1)]
        return float(edges.sum())

    def __repr__(self):
        return f"GraphModel(num_nodes={self.num_nodes}, offset={self.offset})"
