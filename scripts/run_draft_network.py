#!/usr/bin/env python
"""
Run the draft network pipeline.

This script fetches NBA game logs and a draft class roster, builds the class's
teammate network (players who shared a team in the same season) and saves a
force-directed rendering of it.

Example:
    $ python scripts/run_draft_network.py
    $ python scripts/run_draft_network.py --seasons 2018 2024 --draft-years 2018
    $ python scripts/run_draft_network.py --draft-years 2018 2019 --separate-classes
"""

import sys
import argparse
import logging
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from draftnet.acquisition.nba_stats import fetch_game_logs
from draftnet.exceptions import DraftNetworkError, EmptyGraphError
from draftnet.main import load_parameters, run_pipeline
from draftnet.pipeline.draft_network.nodes import draft_years, season_years

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_params(args) -> dict:
    """Merge command line overrides into the configured parameters."""
    params = load_parameters(conf_source=args.conf_source, env=args.env)

    if args.seasons is not None:
        params["seasons"] = {"start": args.seasons[0], "end": args.seasons[1]}
    if args.draft_years is not None:
        params["draft_years"] = args.draft_years
    if args.match_on is not None:
        params["match_on"] = args.match_on
    if args.edge_mode is not None:
        params["edge_mode"] = args.edge_mode
    if args.extra_attributes:
        params["extra_attributes"] = True
    if args.cache_dir is not None:
        params["cache_dir"] = str(args.cache_dir)
    if args.visuals_dir is not None:
        params["visuals_dir"] = str(args.visuals_dir)
    if args.seed is not None:
        params["layout_seed"] = args.seed

    return params


def run(args) -> int:
    """
    Run one analysis, or one per draft year with ``--separate-classes``.

    Returns:
        int: Process exit code
    """
    params = build_params(args)

    if not args.separate_classes:
        try:
            result = run_pipeline(params)
        except DraftNetworkError as e:
            logger.error(f"Draft network failed: {e}")
            return 1
        logger.info(f"Draft network saved to {result['figure']}")
        return 0

    # Fetch the logs once and reuse the snapshot for every class
    try:
        logs = fetch_game_logs(
            season_years(params),
            season_type=params.get("season_type", "Regular Season"),
            cache_dir=params.get("cache_dir"),
        )
    except DraftNetworkError as e:
        logger.error(f"Game log acquisition failed: {e}")
        return 1

    exit_code = 0
    for year in draft_years(params):
        class_params = {**params, "draft_years": [year]}
        try:
            result = run_pipeline(class_params, game_logs=logs)
        except EmptyGraphError as e:
            logger.warning(f"Draft class {year} has no teammate edges: {e}")
            continue
        except DraftNetworkError as e:
            logger.error(f"Draft class {year} failed: {e}")
            exit_code = 1
            continue
        logger.info(f"Draft class {year} network saved to {result['figure']}")

    return exit_code


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build and render the teammate network of an NBA draft class"
    )

    parser.add_argument(
        "--seasons",
        type=int,
        nargs=2,
        metavar=("START", "END"),
        help="First and last season ending year, inclusive (2018 is 2017-18)"
    )

    parser.add_argument(
        "--draft-years",
        type=int,
        nargs="+",
        help="Draft years forming the class (e.g., 2018 or 2018 2019)"
    )

    parser.add_argument(
        "--separate-classes",
        action="store_true",
        help="Render one network per draft year, reusing a single game log fetch"
    )

    parser.add_argument(
        "--match-on",
        choices=["player_id", "player_name"],
        help="Key matching roster players to game logs"
    )

    parser.add_argument(
        "--edge-mode",
        choices=["weighted", "simple", "multi"],
        help="How pairs sharing several team-seasons are represented"
    )

    parser.add_argument(
        "--extra-attributes",
        action="store_true",
        help="Attach assist, rebound and minute averages to nodes"
    )

    parser.add_argument("--cache-dir", type=Path, help="Directory for parquet snapshots of fetched data")
    parser.add_argument("--visuals-dir", type=Path, help="Directory for the rendered figure")
    parser.add_argument("--seed", type=int, help="Layout seed")
    parser.add_argument("--conf-source", type=Path, help="Configuration directory (default: conf/)")
    parser.add_argument("--env", help="Configuration environment layered over base")

    return parser.parse_args()


if __name__ == "__main__":
    sys.exit(run(parse_args()))
