"""
Visualization utilities for grid tours
"""

import math
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from roundtrip.core.tours import Tour


def _draw_tour(ax, n: int, m: int, tour: Tour, title: Optional[str] = None):
    """Draw one tour on an axis, rows growing downwards like the vertex numbering."""
    xs = [v % n for v in tour] + [tour[0] % n]
    ys = [v // n for v in tour] + [tour[0] // n]

    # Dots
    for y in range(m):
        for x in range(n):
            ax.plot(x, y, 'o', color='#888888', markersize=4, zorder=2)

    ax.plot(xs, ys, color='#4444FF', linewidth=2, alpha=0.8, zorder=3)

    # Start vertex and travel direction
    ax.plot(xs[0], ys[0], 'go', markersize=9, zorder=5)
    ax.annotate('', xy=(xs[1], ys[1]), xytext=(xs[0], ys[0]),
                arrowprops=dict(arrowstyle='->', color='green', lw=2), zorder=6)

    ax.set_xlim(-0.5, n - 0.5)
    ax.set_ylim(m - 0.5, -0.5)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=10)


def render_tour(n: int, m: int, tour: Tour, output_path: str,
                title: str = "Closed tour") -> str:
    """
    Save a single tour as an image.

    Args:
        n, m: Grid dimensions (columns, rows)
        tour: Vertex sequence of the tour
        output_path: Where to save the image
        title: Plot title

    Returns:
        The output path
    """
    fig, ax = plt.subplots(1, 1, figsize=(max(3, n * 0.8), max(3, m * 0.8)))
    _draw_tour(ax, n, m, tour, f"{title}\nGrid: {n}×{m}")

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return output_path


def render_gallery(n: int, m: int, tours: Sequence[Tour], output_path: str,
                   columns: int = 4) -> str:
    """Save several tours side by side in one image."""
    if not tours:
        raise ValueError("No tours to render")

    cols = min(columns, len(tours))
    rows = math.ceil(len(tours) / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(cols * max(2, n * 0.6), rows * max(2, m * 0.6)),
                             squeeze=False)

    for k, ax in enumerate(axes.flat):
        if k < len(tours):
            _draw_tour(ax, n, m, tours[k], f"#{k + 1}")
        else:
            ax.axis('off')

    fig.suptitle(f"{n}×{m} grid: {len(tours)} tours", fontsize=12, fontweight='bold')
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return output_path


def render_tours(n: int, m: int, tours: Sequence[Tour], output_dir: str,
                 limit: Optional[int] = None) -> List[str]:
    """Save each tour (up to limit) to its own file in output_dir."""
    selected = list(tours if limit is None else tours[:limit])
    paths = []
    for k, tour in enumerate(selected, start=1):
        path = str(Path(output_dir) / f"tour_{n}x{m}_{k:04d}.png")
        paths.append(render_tour(n, m, tour, path, title=f"Tour #{k}"))
    return paths
