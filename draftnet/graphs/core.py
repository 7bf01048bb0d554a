"""
Core graph analytics functionality for the draft network analysis.

This module provides functions to:
1. Filter game logs down to the players of a draft class
2. Prepare the teammate edge table from shared team-seasons
3. Aggregate per-season and career node statistics
4. Build the NetworkX teammate graph

Two players are teammates when they appear for the same team in the same
season. Every (team, season) group of n draft-class players contributes all
C(n, 2) pairs, so a pair that played together in several seasons shows up
several times in the raw edge table.
"""

import logging
from itertools import combinations
from typing import List, Optional, Union

import networkx as nx
import polars as pl

from draftnet.exceptions import EmptyGraphError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

MATCH_KEYS = ("player_id", "player_name")
EDGE_MODES = ("weighted", "simple", "multi")

SEASON_STAT_COLUMNS = ("pts", "ast", "treb", "minutes")
# Node attributes only attached with extra_attributes=True
EXTRA_NODE_ATTRIBUTES = ("avg_ast", "avg_treb", "avg_minutes")
ROSTER_NODE_ATTRIBUTES = ("draft_year", "round_number", "overall_pick", "draft_team")


def _check_match_key(key: str) -> str:
    if key not in MATCH_KEYS:
        raise ValueError(f"match_on must be one of {MATCH_KEYS}, got {key!r}")
    return key


def filter_logs_to_roster(
    logs: pl.DataFrame,
    roster: pl.DataFrame,
    key: str = "player_id",
) -> pl.DataFrame:
    """
    Keep the game logs of draft-class players.

    With ``key="player_name"`` matching is exact string equality, so a name
    spelled differently in the logs and the roster drops that player.

    Args:
        logs: Game logs snapshot
        roster: Draft-class roster
        key: Column identifying a player in both tables

    Returns:
        pl.DataFrame: Career logs of the draft class
    """
    key = _check_match_key(key)
    members = roster.get_column(key).drop_nulls().unique().to_list()
    career_logs = logs.filter(pl.col(key).is_in(members))

    matched = career_logs.get_column(key).n_unique()
    logger.info(f"Matched {matched} of {len(members)} draft-class players in {len(career_logs):,} game logs")
    return career_logs


def player_team_seasons(career_logs: pl.DataFrame, key: str = "player_id") -> pl.DataFrame:
    """
    Reduce career logs to distinct (player, team, season) triples.

    Args:
        career_logs: Game logs of the draft class
        key: Player key column

    Returns:
        pl.DataFrame: Distinct player-team-season rows in first-seen order
    """
    key = _check_match_key(key)
    return career_logs.select([key, "team", "season"]).unique(maintain_order=True)


def build_teammate_edges(team_seasons: pl.DataFrame, key: str = "player_id") -> pl.DataFrame:
    """
    Prepare the teammate edge table.

    Each distinct (team, season) holding n >= 2 players emits all C(n, 2)
    unordered pairs. Groups with fewer than two players emit nothing and
    repeated pairs are kept.

    Args:
        team_seasons: Distinct player-team-season rows
        key: Player key column

    Returns:
        pl.DataFrame: Edge rows with ``source``, ``target``, ``team``, ``season``

    Raises:
        EmptyGraphError: If no team-season has two or more players
    """
    key = _check_match_key(key)
    groups = (
        team_seasons
        .group_by(["team", "season"], maintain_order=True)
        .agg(pl.col(key).alias("players"))
    )

    rows = []
    for team, season, players in groups.iter_rows():
        if len(players) < 2:
            continue
        for source, target in combinations(players, 2):
            rows.append((source, target, team, season))

    if not rows:
        raise EmptyGraphError(
            f"No team-season among {len(groups)} has two or more draft-class players"
        )

    key_dtype = team_seasons.schema[key]
    edges = pl.DataFrame(
        rows,
        schema={
            "source": key_dtype,
            "target": key_dtype,
            "team": team_seasons.schema["team"],
            "season": team_seasons.schema["season"],
        },
        orient="row",
    )
    logger.info(f"Found {len(edges)} teammate edges across {len(groups)} team-seasons")
    return edges


def summarize_player_seasons(career_logs: pl.DataFrame, key: str = "player_id") -> pl.DataFrame:
    """
    Per-season averages and games played for each player.

    Means ignore missing values. Games are counted as distinct game ids, so a
    player traded mid-season is not double counted.

    Args:
        career_logs: Game logs of the draft class
        key: Player key column

    Returns:
        pl.DataFrame: One row per (player, season)
    """
    key = _check_match_key(key)
    return (
        career_logs
        .group_by([key, "season"], maintain_order=True)
        .agg(
            [pl.col(col).mean() for col in SEASON_STAT_COLUMNS]
            + [pl.col("game_id").n_unique().alias("games_played")]
        )
    )


def aggregate_node_stats(season_stats: pl.DataFrame, key: str = "player_id") -> pl.DataFrame:
    """
    Career node statistics from per-season summaries.

    ``avg_pts`` is the unweighted mean of the season averages: every season
    counts the same regardless of games played. ``total_games`` is the sum of
    per-season game counts.

    Args:
        season_stats: Output of ``summarize_player_seasons``
        key: Player key column

    Returns:
        pl.DataFrame: One row per player
    """
    key = _check_match_key(key)
    return (
        season_stats
        .group_by(key, maintain_order=True)
        .agg(
            pl.col("pts").mean().alias("avg_pts"),
            pl.col("ast").mean().alias("avg_ast"),
            pl.col("treb").mean().alias("avg_treb"),
            pl.col("minutes").mean().alias("avg_minutes"),
            pl.col("games_played").sum().alias("total_games"),
            pl.col("season").n_unique().alias("seasons_played"),
        )
    )


def build_teammate_graph(
    edges: pl.DataFrame,
    node_stats: pl.DataFrame,
    roster: Optional[pl.DataFrame] = None,
    key: str = "player_id",
    edge_mode: str = "weighted",
    extra_attributes: bool = False,
) -> Union[nx.Graph, nx.MultiGraph]:
    """
    Build the teammate graph from the edge table and node statistics.

    Edge modes:
    - ``weighted``: one edge per pair, ``weight`` counts shared team-seasons
    - ``simple``: one edge per pair, no weight
    - ``multi``: a ``MultiGraph`` with one edge per raw edge row

    Args:
        edges: Teammate edge table
        node_stats: Career node statistics
        roster: Draft-class roster for labels and draft metadata
        key: Player key column
        edge_mode: How repeated pairs are represented
        extra_attributes: Attach assist, rebound and minute averages too

    Returns:
        nx.Graph or nx.MultiGraph: The teammate graph
    """
    key = _check_match_key(key)
    if edge_mode not in EDGE_MODES:
        raise ValueError(f"edge_mode must be one of {EDGE_MODES}, got {edge_mode!r}")
    if edges.is_empty():
        raise EmptyGraphError("Cannot build a teammate graph without edges")

    G = nx.MultiGraph() if edge_mode == "multi" else nx.Graph()

    for source, target, team, season in edges.select(["source", "target", "team", "season"]).iter_rows():
        if edge_mode == "multi":
            G.add_edge(source, target, team=team, season=season)
        elif edge_mode == "simple":
            G.add_edge(source, target)
        elif G.has_edge(source, target):
            G[source][target]["weight"] += 1
            G[source][target]["team_seasons"].append((team, season))
        else:
            G.add_edge(source, target, weight=1, team_seasons=[(team, season)])

    # Node attributes
    stat_columns = ["avg_pts", "total_games", "seasons_played"]
    if extra_attributes:
        stat_columns += list(EXTRA_NODE_ATTRIBUTES)
    stats = {
        row[key]: {col: row[col] for col in stat_columns}
        for row in node_stats.iter_rows(named=True)
    }
    nx.set_node_attributes(G, {n: stats[n] for n in G.nodes if n in stats})

    labels = {}
    if roster is not None:
        meta_columns = [c for c in ("player_id", "player_name") + ROSTER_NODE_ATTRIBUTES if c in roster.columns]
        meta = {}
        for row in roster.select(meta_columns).iter_rows(named=True):
            meta.setdefault(row[key], row)
        nx.set_node_attributes(G, {n: meta[n] for n in G.nodes if n in meta})
        labels = {n: meta[n]["player_name"] for n in G.nodes if n in meta and meta[n].get("player_name")}
    nx.set_node_attributes(G, {n: labels.get(n, str(n)) for n in G.nodes}, name="label")

    logger.info(f"Teammate graph ({edge_mode}): |V|={G.number_of_nodes():,}, |E|={G.number_of_edges():,}")
    return G


def build_draft_class_network(
    logs: pl.DataFrame,
    roster: pl.DataFrame,
    match_on: str = "player_id",
    edge_mode: str = "weighted",
    extra_attributes: bool = False,
) -> Union[nx.Graph, nx.MultiGraph]:
    """
    Build the teammate network of a draft class from a game log snapshot.

    Args:
        logs: Game logs snapshot, reused as-is and never modified
        roster: Draft-class roster
        match_on: Player key shared by logs and roster
        edge_mode: How repeated pairs are represented (see ``build_teammate_graph``)
        extra_attributes: Attach assist, rebound and minute averages too

    Returns:
        nx.Graph or nx.MultiGraph: Teammate graph annotated with career statistics

    Raises:
        EmptyGraphError: If no two draft-class players ever shared a team-season
    """
    match_on = _check_match_key(match_on)
    if edge_mode not in EDGE_MODES:
        raise ValueError(f"edge_mode must be one of {EDGE_MODES}, got {edge_mode!r}")

    draft_years = draft_years_of(roster)
    logger.info(f"Building teammate network for draft class {draft_years}")

    career_logs = filter_logs_to_roster(logs, roster, key=match_on)
    edges = build_teammate_edges(player_team_seasons(career_logs, key=match_on), key=match_on)
    node_stats = aggregate_node_stats(summarize_player_seasons(career_logs, key=match_on), key=match_on)

    G = build_teammate_graph(
        edges,
        node_stats,
        roster=roster,
        key=match_on,
        edge_mode=edge_mode,
        extra_attributes=extra_attributes,
    )
    G.graph.update(draft_years=draft_years, match_on=match_on, edge_mode=edge_mode)
    return G


def draft_years_of(roster: pl.DataFrame) -> List[int]:
    """Sorted distinct draft years present in a roster."""
    if "draft_year" not in roster.columns:
        return []
    return sorted(roster.get_column("draft_year").drop_nulls().unique().to_list())
