"""
NBA Stats API acquisition for the draft network analysis.

This module provides functions to:
1. Fetch player game logs for a set of seasons (one request per season)
2. Fetch the roster of players drafted in a set of draft years
3. Normalize both responses into fixed-schema polars DataFrames

Requests run one after another. A provider failure is fatal: it is logged and
raised as ``AcquisitionError`` without retrying.
"""

import logging
import numbers
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd
import polars as pl
from nba_api.stats.endpoints import drafthistory, leaguegamelog
from tqdm import tqdm

from draftnet.exceptions import AcquisitionError
from draftnet.settings import FIRST_SEASON, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

# One row per player per game. ``season`` is the year the season ends in.
GAME_LOG_SCHEMA = {
    "player_id": pl.Int64,
    "player_name": pl.Utf8,
    "team": pl.Utf8,
    "season": pl.Int64,
    "game_id": pl.Utf8,
    "pts": pl.Float64,
    "ast": pl.Float64,
    "treb": pl.Float64,
    "minutes": pl.Float64,
}

DRAFT_ROSTER_SCHEMA = {
    "player_id": pl.Int64,
    "player_name": pl.Utf8,
    "draft_year": pl.Int64,
    "round_number": pl.Int64,
    "overall_pick": pl.Int64,
    "draft_team": pl.Utf8,
}

# NBA Stats column -> project column
GAME_LOG_COLUMNS = {
    "PLAYER_ID": "player_id",
    "PLAYER_NAME": "player_name",
    "TEAM_ABBREVIATION": "team",
    "GAME_ID": "game_id",
    "PTS": "pts",
    "AST": "ast",
    "REB": "treb",
    "MIN": "minutes",
}

DRAFT_COLUMNS = {
    "PERSON_ID": "player_id",
    "PLAYER_NAME": "player_name",
    "SEASON": "draft_year",
    "ROUND_NUMBER": "round_number",
    "OVERALL_PICK": "overall_pick",
    "TEAM_ABBREVIATION": "draft_team",
}


def season_string(year: int) -> str:
    """
    Convert a season ending year to the NBA Stats season label.

    Args:
        year: Year the season ends in (2018 for the 2017-18 season)

    Returns:
        str: Season label such as "2017-18"
    """
    start = year - 1
    return f"{start}-{str(year)[-2:]}"


def validate_years(years: Iterable[int], what: str = "season") -> List[int]:
    """
    Check a collection of season or draft years and return it sorted and deduplicated.

    Args:
        years: Season ending years or draft years
        what: Name used in error messages

    Returns:
        List[int]: Sorted unique years

    Raises:
        ValueError: If the collection is empty or holds a non-integer or a year
            before the first tracked season
    """
    if isinstance(years, numbers.Integral):
        years = [years]
    checked = set()
    for year in years:
        if isinstance(year, bool) or not isinstance(year, numbers.Integral):
            raise ValueError(f"{what} years must be integers, got {year!r}")
        if year < FIRST_SEASON:
            raise ValueError(f"{what} year {year} is before the first tracked season ({FIRST_SEASON})")
        checked.add(int(year))
    if not checked:
        raise ValueError(f"At least one {what} year is required")
    return sorted(checked)


def _normalize(frame: pd.DataFrame, columns: dict, schema: dict, label: str) -> pl.DataFrame:
    """Rename and cast an NBA Stats response to a project schema."""
    if frame.empty:
        return pl.DataFrame(schema=schema)

    missing = [col for col in columns if col not in frame.columns]
    if missing:
        raise AcquisitionError(f"{label} response is missing columns: {missing}")

    return (
        pl.from_pandas(frame[list(columns)])
        .rename(columns)
    )


def _cast(df: pl.DataFrame, schema: dict) -> pl.DataFrame:
    return df.select([pl.col(name).cast(dtype, strict=False) for name, dtype in schema.items()])


def fetch_season_game_logs(
    season: int,
    season_type: str = "Regular Season",
    timeout: int = REQUEST_TIMEOUT,
) -> pl.DataFrame:
    """
    Fetch every player game log of one season.

    Args:
        season: Season ending year
        season_type: NBA Stats season type ("Regular Season", "Playoffs", ...)
        timeout: Request timeout in seconds

    Returns:
        pl.DataFrame: Game logs with ``GAME_LOG_SCHEMA`` columns
    """
    label = f"Game logs {season_string(season)}"
    try:
        response = leaguegamelog.LeagueGameLog(
            season=season_string(season),
            season_type_all_star=season_type,
            player_or_team_abbreviation="P",
            timeout=timeout,
        )
        frame = response.get_data_frames()[0]
    except Exception as e:
        logger.error(f"Failed to fetch {label.lower()}: {e}")
        raise AcquisitionError(f"Failed to fetch {label.lower()}") from e

    logs = _normalize(frame, GAME_LOG_COLUMNS, GAME_LOG_SCHEMA, label)
    if "season" not in logs.columns:
        logs = logs.with_columns(pl.lit(season).alias("season"))
    return _cast(logs, GAME_LOG_SCHEMA)


def fetch_game_logs(
    seasons: Iterable[int],
    season_type: str = "Regular Season",
    cache_dir: Optional[Path] = None,
    timeout: int = REQUEST_TIMEOUT,
) -> pl.DataFrame:
    """
    Fetch player game logs for a set of seasons.

    Seasons are requested one at a time. When ``cache_dir`` is given, each
    season is written there as parquet and read back on later calls instead
    of being requested again.

    Args:
        seasons: Season ending years (2018 for 2017-18)
        season_type: NBA Stats season type
        cache_dir: Optional directory holding per-season parquet snapshots
        timeout: Request timeout in seconds

    Returns:
        pl.DataFrame: Game logs of all requested seasons
    """
    seasons = validate_years(seasons, "season")
    logger.info(f"Fetching game logs for {len(seasons)} seasons ({seasons[0]}-{seasons[-1]})")

    if cache_dir is not None:
        cache_dir = Path(cache_dir)
        cache_dir.mkdir(parents=True, exist_ok=True)

    frames = []
    for season in tqdm(seasons, desc="Fetching game logs"):
        cache_file = None
        if cache_dir is not None:
            slug = season_type.lower().replace(" ", "_")
            cache_file = cache_dir / f"game_logs_{season}_{slug}.parquet"
            if cache_file.exists():
                logger.info(f"Reading cached game logs from {cache_file}")
                frames.append(_cast(pl.read_parquet(cache_file), GAME_LOG_SCHEMA))
                continue

        season_logs = fetch_season_game_logs(season, season_type=season_type, timeout=timeout)
        logger.info(f"Season {season_string(season)}: {len(season_logs):,} game log rows")

        if cache_file is not None:
            season_logs.write_parquet(cache_file)
        frames.append(season_logs)

    logs = pl.concat(frames, how="vertical")
    logger.info(f"Fetched {len(logs):,} game log rows for {logs['player_id'].n_unique():,} players")
    return logs


def fetch_draft_roster(
    draft_years: Iterable[int],
    cache_dir: Optional[Path] = None,
    timeout: int = REQUEST_TIMEOUT,
) -> pl.DataFrame:
    """
    Fetch the players drafted in the given years.

    Args:
        draft_years: Draft years (several years form one combined class)
        cache_dir: Optional directory holding parquet snapshots
        timeout: Request timeout in seconds

    Returns:
        pl.DataFrame: Draft roster with ``DRAFT_ROSTER_SCHEMA`` columns
    """
    draft_years = validate_years(draft_years, "draft")
    logger.info(f"Fetching draft roster for {draft_years}")

    frames = []
    for year in draft_years:
        cache_file = None
        if cache_dir is not None:
            cache_dir = Path(cache_dir)
            cache_dir.mkdir(parents=True, exist_ok=True)
            cache_file = cache_dir / f"draft_{year}.parquet"
            if cache_file.exists():
                logger.info(f"Reading cached draft roster from {cache_file}")
                frames.append(_cast(pl.read_parquet(cache_file), DRAFT_ROSTER_SCHEMA))
                continue

        label = f"Draft {year}"
        try:
            response = drafthistory.DraftHistory(
                league_id="00",
                season_year_nullable=str(year),
                timeout=timeout,
            )
            frame = response.get_data_frames()[0]
        except Exception as e:
            logger.error(f"Failed to fetch draft {year}: {e}")
            raise AcquisitionError(f"Failed to fetch draft {year}") from e

        roster = _cast(_normalize(frame, DRAFT_COLUMNS, DRAFT_ROSTER_SCHEMA, label), DRAFT_ROSTER_SCHEMA)
        logger.info(f"{label}: {len(roster)} players")

        if cache_file is not None:
            roster.write_parquet(cache_file)
        frames.append(roster)

    return pl.concat(frames, how="vertical")
