"""
Graph visualization utilities for the draft network analysis.

This module renders the teammate graph of a draft class as a static figure:
Fruchterman-Reingold layout, translucent edges, nodes sized by career games
and coloured by scoring average, with player labels nudged apart.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Normalize

from draftnet.exceptions import EmptyGraphError
from draftnet.settings import DEFAULT_VISUALS_DIR

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EDGE_COLOR = "#cccccc"
EDGE_ALPHA = 0.4
NODE_ALPHA = 0.9
NODE_CMAP = "plasma_r"
MISSING_NODE_COLOR = "lightgray"
# Marker area in points^2 for the fewest and most games played
NODE_SIZE_RANGE = (60.0, 600.0)


def network_title(draft_years: Sequence[int]) -> str:
    """
    Figure title for a draft class.

    Args:
        draft_years: Draft years making up the class

    Returns:
        str: e.g. "2018 Draft Class Career Trajectory Network"
    """
    years = sorted(draft_years)
    if not years:
        label = ""
    elif len(years) == 1:
        label = f"{years[0]} "
    elif years == list(range(years[0], years[-1] + 1)):
        label = f"{years[0]}-{years[-1]} "
    else:
        label = ", ".join(str(y) for y in years) + " "
    return f"{label}Draft Class Career Trajectory Network"


def scale_node_sizes(
    values: Iterable[Optional[float]],
    size_range: Tuple[float, float] = NODE_SIZE_RANGE,
) -> np.ndarray:
    """
    Map values linearly onto marker areas.

    Missing values get the smallest size; a constant input gets the middle of
    the range.

    Args:
        values: Values to scale, None allowed
        size_range: Smallest and largest marker area

    Returns:
        np.ndarray: Marker areas
    """
    arr = np.array([np.nan if v is None else v for v in values], dtype=float)
    low, high = size_range
    finite = arr[~np.isnan(arr)]
    if finite.size == 0:
        return np.full(arr.shape, low)

    vmin, vmax = finite.min(), finite.max()
    if vmax == vmin:
        scaled = np.full(arr.shape, (low + high) / 2)
    else:
        scaled = low + (arr - vmin) / (vmax - vmin) * (high - low)
    return np.where(np.isnan(scaled), low, scaled)


def repel_labels(
    pos: Dict,
    min_distance: float = 0.08,
    offset: float = 0.04,
    iterations: int = 100,
    step: float = 0.5,
) -> Dict:
    """
    Place labels above their nodes and push overlapping labels apart.

    Labels closer than ``min_distance`` repel each other along the line
    joining them until no pair overlaps or ``iterations`` runs out.

    Args:
        pos: Node positions
        min_distance: Smallest allowed distance between two labels
        offset: Initial vertical offset from the node
        iterations: Maximum number of relaxation steps
        step: Fraction of the overlap resolved per step

    Returns:
        Dict: Label position per node
    """
    nodes = list(pos)
    if not nodes:
        return {}

    anchors = np.array([pos[n] for n in nodes], dtype=float)
    labels = anchors + np.array([0.0, offset])
    if len(nodes) > 1:
        # Tiny deterministic spread so coincident labels have a direction to move in
        angles = np.linspace(0, 2 * np.pi, len(nodes), endpoint=False)
        labels += 1e-3 * np.column_stack([np.cos(angles), np.sin(angles)])

    for _ in range(iterations):
        delta = labels[:, None, :] - labels[None, :, :]
        dist = np.linalg.norm(delta, axis=-1)
        np.fill_diagonal(dist, np.inf)
        overlap = np.clip(min_distance - dist, 0.0, None)
        if not overlap.any():
            break
        safe = np.where(np.isfinite(dist) & (dist > 0), dist, 1.0)
        push = delta / safe[..., None] * overlap[..., None]
        labels += step * push.sum(axis=1) / 2

    return {n: labels[i] for i, n in enumerate(nodes)}


def _size_legend_values(games: List[Optional[float]]) -> List[int]:
    finite = [g for g in games if g is not None]
    if not finite:
        return []
    return sorted({int(min(finite)), int(np.median(finite)), int(max(finite))})


def _has_points(value: Optional[float]) -> bool:
    return value is not None and np.isfinite(value)


def edge_widths(G: nx.Graph) -> Tuple[List[Tuple], List[float]]:
    """
    Edges to draw and their line widths.

    Each connected pair is drawn as a single line whose width grows with the
    number of team-seasons the pair shared: the ``weight`` attribute for a
    weighted graph, the number of parallel edges for a ``MultiGraph``.

    Args:
        G: Teammate graph

    Returns:
        Tuple[List[Tuple], List[float]]: One (u, v) per connected pair and its width
    """
    if G.is_multigraph():
        edgelist = list(nx.Graph(G).edges())
        return edgelist, [0.8 * G.number_of_edges(u, v) for u, v in edgelist]
    edgelist = list(G.edges())
    return edgelist, [0.8 * G.edges[u, v].get("weight", 1) for u, v in edgelist]


def draw_player_nodes(
    G: nx.Graph,
    pos: Dict,
    ax: plt.Axes,
    node_sizes: Dict,
    cmap,
    norm: Normalize,
) -> List:
    """
    Draw every node once: coloured by ``avg_pts``, or light grey without one.

    Args:
        G: Teammate graph
        pos: Node positions
        ax: Axes to draw on
        node_sizes: Marker area per node
        cmap: Colormap for scoring averages
        norm: Normalization of scoring averages

    Returns:
        List: The drawn node collections
    """
    scored = [n for n in G.nodes() if _has_points(G.nodes[n].get("avg_pts"))]
    scored_set = set(scored)
    unscored = [n for n in G.nodes() if n not in scored_set]

    collections = []
    if scored:
        collections.append(nx.draw_networkx_nodes(
            G, pos, nodelist=scored, ax=ax,
            node_size=[node_sizes[n] for n in scored],
            node_color=[G.nodes[n]["avg_pts"] for n in scored],
            cmap=cmap, vmin=norm.vmin, vmax=norm.vmax, alpha=NODE_ALPHA
        ))
    if unscored:
        collections.append(nx.draw_networkx_nodes(
            G, pos, nodelist=unscored, ax=ax,
            node_size=[node_sizes[n] for n in unscored],
            node_color=MISSING_NODE_COLOR, alpha=NODE_ALPHA
        ))
    return collections


def plot_draft_class_network(
    G: nx.Graph,
    output_file: Path = None,
    visuals_dir: Path = DEFAULT_VISUALS_DIR,
    title: str = None,
    seed: int = 42,
    figsize: Tuple[int, int] = (14, 12),
    dpi: int = 300,
    label_font_size: int = 8,
) -> Path:
    """
    Create a visualization of a draft-class teammate graph.

    Every node is drawn once, in light grey when it has no scoring average.
    Repeated pairs, whether weighted or parallel ``MultiGraph`` edges, are
    drawn as one line whose width grows with the shared team-seasons (see
    ``edge_widths``).

    Args:
        G: Teammate graph with ``avg_pts``, ``total_games`` and ``label`` node attributes
        output_file: Path to save the visualization
        visuals_dir: Directory to save visualizations if output_file is not specified
        title: Figure title, derived from the graph's draft years by default
        seed: Layout seed, the same seed gives the same picture
        figsize: Figure size
        dpi: Output DPI
        label_font_size: Font size of player labels

    Returns:
        Path: Path to the saved visualization
    """
    if G.number_of_nodes() == 0:
        raise EmptyGraphError("Cannot plot an empty teammate graph")

    draft_years = G.graph.get("draft_years", [])
    logger.info(f"Creating draft class network visualization for {draft_years}")

    # Use default paths if not specified
    if output_file is None:
        visuals_dir = Path(visuals_dir)
        visuals_dir.mkdir(parents=True, exist_ok=True)
        slug = "_".join(str(y) for y in draft_years) or "draft_class"
        output_file = visuals_dir / f"{slug}_draft_network.png"
    else:
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

    if title is None:
        title = network_title(draft_years)

    nodes = list(G.nodes())
    games = [G.nodes[n].get("total_games") for n in nodes]
    legend_games = _size_legend_values(games)
    sizes = scale_node_sizes(games + legend_games)
    node_sizes, legend_sizes = dict(zip(nodes, sizes[:len(nodes)])), sizes[len(nodes):]

    # Fruchterman-Reingold: connected players end up close together
    pos = nx.fruchterman_reingold_layout(G, seed=seed, weight="weight")

    fig, ax = plt.subplots(figsize=figsize)

    edgelist, widths = edge_widths(G)
    nx.draw_networkx_edges(
        nx.Graph(G) if G.is_multigraph() else G, pos, edgelist=edgelist, ax=ax,
        edge_color=EDGE_COLOR, alpha=EDGE_ALPHA, width=widths, arrows=False
    )

    cmap = plt.get_cmap(NODE_CMAP)
    finite_pts = [G.nodes[n]["avg_pts"] for n in nodes if _has_points(G.nodes[n].get("avg_pts"))]
    vmin, vmax = (min(finite_pts), max(finite_pts)) if finite_pts else (0.0, 1.0)
    norm = Normalize(vmin=vmin, vmax=vmax)
    draw_player_nodes(G, pos, ax, node_sizes, cmap, norm)
    fig.colorbar(ScalarMappable(norm=norm, cmap=cmap), ax=ax, label="Avg PPG", shrink=0.6)

    # Size legend
    for value, size in zip(legend_games, legend_sizes):
        ax.scatter([], [], s=size, color="gray", alpha=0.6, label=str(value))
    if legend_games:
        ax.legend(
            title="Total Games Played", loc="lower left",
            frameon=False, scatterpoints=1, labelspacing=1.5
        )

    label_pos = repel_labels(pos)
    for n in nodes:
        label = G.nodes[n].get("label", str(n))
        moved = np.linalg.norm(np.asarray(label_pos[n]) - np.asarray(pos[n])) > 0.06
        ax.annotate(
            label,
            xy=pos[n],
            xytext=label_pos[n],
            fontsize=label_font_size,
            ha="center",
            va="center",
            arrowprops=dict(arrowstyle="-", color="gray", lw=0.4, alpha=0.6) if moved else None,
        )

    ax.set_title(title, fontsize=16, fontweight="bold", loc="center")
    ax.axis("off")
    fig.tight_layout()
    fig.savefig(output_file, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info(f"Saved draft class network visualization to {output_file}")

    return output_file
