"""
Pipeline node function definitions for the draft network.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import networkx as nx
import polars as pl
from kedro.pipeline import Pipeline, node

from draftnet.acquisition.nba_stats import fetch_draft_roster, fetch_game_logs
from draftnet.graphs.core import build_draft_class_network
from draftnet.graphs.visualization import plot_draft_class_network
from draftnet.settings import DEFAULT_VISUALS_DIR


logger = logging.getLogger(__name__)


def season_years(params: Dict[str, Any]) -> List[int]:
    """
    Resolve the ``seasons`` parameter to a list of season ending years.

    Accepts ``{"start": 2018, "end": 2024}`` (inclusive), a list of years or a
    single year.

    Args:
        params: Pipeline parameters

    Returns:
        List[int]: Season ending years
    """
    seasons = params.get("seasons", {"start": 2018, "end": 2024})
    if isinstance(seasons, dict):
        return list(range(int(seasons["start"]), int(seasons["end"]) + 1))
    if isinstance(seasons, int):
        return [seasons]
    return list(seasons)


def draft_years(params: Dict[str, Any]) -> List[int]:
    """
    Resolve the ``draft_years`` parameter to a list, accepting a single year.

    Args:
        params: Pipeline parameters

    Returns:
        List[int]: Draft years forming the class
    """
    years = params.get("draft_years", [2018])
    if isinstance(years, int):
        return [years]
    return list(years)


def _cache_dir(params: Dict[str, Any]):
    cache_dir = params.get("cache_dir")
    return Path(cache_dir) if cache_dir else None


def fetch_game_logs_node(params: Dict[str, Any]) -> pl.DataFrame:
    """
    Node function for fetching the game log snapshot.

    Args:
        params: Pipeline parameters

    Returns:
        pl.DataFrame: Game logs of every requested season
    """
    return fetch_game_logs(
        season_years(params),
        season_type=params.get("season_type", "Regular Season"),
        cache_dir=_cache_dir(params),
    )


def fetch_draft_roster_node(params: Dict[str, Any]) -> pl.DataFrame:
    """
    Node function for fetching the draft-class roster.

    Args:
        params: Pipeline parameters

    Returns:
        pl.DataFrame: Players drafted in the requested years
    """
    return fetch_draft_roster(draft_years(params), cache_dir=_cache_dir(params))


def build_network_node(
    game_logs: pl.DataFrame,
    draft_roster: pl.DataFrame,
    params: Dict[str, Any]
) -> nx.Graph:
    """
    Node function for building the teammate graph.

    Args:
        game_logs: Game log snapshot
        draft_roster: Draft-class roster
        params: Pipeline parameters

    Returns:
        nx.Graph: Teammate graph with career node statistics
    """
    return build_draft_class_network(
        game_logs,
        draft_roster,
        match_on=params.get("match_on", "player_id"),
        edge_mode=params.get("edge_mode", "weighted"),
        extra_attributes=bool(params.get("extra_attributes", False)),
    )


def plot_network_node(graph: nx.Graph, params: Dict[str, Any]) -> Path:
    """
    Node function for rendering the teammate graph.

    Args:
        graph: Teammate graph
        params: Pipeline parameters

    Returns:
        Path: Path to the saved figure
    """
    visuals_dir = Path(params.get("visuals_dir") or DEFAULT_VISUALS_DIR)
    return plot_draft_class_network(
        graph,
        output_file=params.get("output_file"),
        visuals_dir=visuals_dir,
        seed=params.get("layout_seed", 42),
        figsize=tuple(params.get("figsize", (14, 12))),
        dpi=params.get("dpi", 300),
    )


def create_pipeline(**kwargs) -> Pipeline:
    """Create the draft network pipeline."""
    return Pipeline(
        [
            node(
                fetch_game_logs_node,
                inputs="params:draft_network",
                outputs="game_logs",
                name="fetch_game_logs",
            ),
            node(
                fetch_draft_roster_node,
                inputs="params:draft_network",
                outputs="draft_roster",
                name="fetch_draft_roster",
            ),
            node(
                build_network_node,
                inputs=["game_logs", "draft_roster", "params:draft_network"],
                outputs="draft_network_graph",
                name="build_draft_network",
            ),
            node(
                plot_network_node,
                inputs=["draft_network_graph", "params:draft_network"],
                outputs="draft_network_figure",
                name="plot_draft_network",
            ),
        ]
    )
