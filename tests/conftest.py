"""
Pytest configuration file for the draft network project.

This file contains shared fixtures and configuration for the test suite.
"""
import matplotlib

matplotlib.use("Agg")

import polars as pl
import pytest

from draftnet.acquisition.nba_stats import DRAFT_ROSTER_SCHEMA, GAME_LOG_SCHEMA


@pytest.fixture
def scenario_logs():
    """
    Game logs for a three-player class.

    - 2018: A and B on X, B traded to Y where he joins C
    - 2019: A, B and C all on X
    - E is on X in 2018 but not in the draft class
    """
    rows = [
        # player_id, player_name, team, season, game_id, pts, ast, treb, minutes
        (1, "Player A", "X", 2018, "g1", 10.0, 2.0, 4.0, 30.0),
        (1, "Player A", "X", 2018, "g2", 20.0, 4.0, 6.0, 32.0),
        (2, "Player B", "X", 2018, "g1", 5.0, 1.0, 2.0, 20.0),
        (99, "Player E", "X", 2018, "g1", 7.0, 0.0, 1.0, 12.0),
        (2, "Player B", "Y", 2018, "g3", 15.0, 3.0, 3.0, 25.0),
        (3, "Player C", "Y", 2018, "g3", 8.0, None, 5.0, 22.0),
        (1, "Player A", "X", 2019, "g4", 30.0, 5.0, 7.0, 36.0),
        (2, "Player B", "X", 2019, "g4", 0.0, 0.0, 1.0, 10.0),
        (3, "Player C", "X", 2019, "g4", 12.0, 2.0, 8.0, 28.0),
        (3, "Player C", "X", 2019, "g5", None, None, None, None),
    ]
    return pl.DataFrame(rows, schema=GAME_LOG_SCHEMA, orient="row")


@pytest.fixture
def scenario_roster():
    """Draft class A, B, C plus D who never played."""
    rows = [
        (1, "Player A", 2018, 1, 3, "ATL"),
        (2, "Player B", 2018, 1, 10, "BOS"),
        (3, "Player C", 2018, 2, 41, "CHI"),
        (4, "Player D", 2018, 2, 55, "DEN"),
    ]
    return pl.DataFrame(rows, schema=DRAFT_ROSTER_SCHEMA, orient="row")
