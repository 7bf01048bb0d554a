"""
Data acquisition for the draft network analysis.

Game logs and draft rosters come from the NBA Stats API through ``nba_api``.
"""

from .nba_stats import (
    DRAFT_ROSTER_SCHEMA,
    GAME_LOG_SCHEMA,
    fetch_draft_roster,
    fetch_game_logs,
    season_string,
)


__all__ = [
    "DRAFT_ROSTER_SCHEMA",
    "GAME_LOG_SCHEMA",
    "fetch_draft_roster",
    "fetch_game_logs",
    "season_string",
]
