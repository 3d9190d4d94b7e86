import numpy as np
import matplotlib.pyplot as plt


def pheromone_heatmap(matrix, save_path=None, cmap='coolwarm', title="Pheromone Matrix"):
    """
    Static heatmap of one pheromone matrix. Saves to `save_path` when
    given and returns the figure.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise ValueError("Expected a 2D pheromone matrix.")

    fig, ax = plt.subplots(figsize=(6, 5))
    im = ax.imshow(matrix, cmap=cmap, interpolation='nearest')
    ax.set_title(title)
    ax.set_xlabel("To town")
    ax.set_ylabel("From town")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label="Trail strength")
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
    return fig


def pheromone_composite(pheromone_matrices, cmap='coolwarm', save_path=None):
    """
    Single static heatmap: average pheromone intensity across all iterations.
    """
    if not pheromone_matrices:
        raise ValueError("No pheromone matrices provided.")
    avg_matrix = np.mean(np.array(pheromone_matrices), axis=0)
    return pheromone_heatmap(avg_matrix, save_path=save_path, cmap=cmap,
                             title="Cumulative Pheromone Intensity")


def convergence_plot(history, save_path=None):
    """Best tour length after each iteration."""
    if not history:
        raise ValueError("Empty best-length history.")
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(np.arange(1, len(history) + 1), history, 'b-', linewidth=1.5)
    ax.set_title(f"Best Tour Length (final {history[-1]:.2f})")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Length")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
    return fig
