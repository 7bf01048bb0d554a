"""
Main entry point for running the draft network pipeline.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import polars as pl
from kedro.config import OmegaConfigLoader
from kedro.io import DataCatalog, MemoryDataset
from kedro.runner import SequentialRunner

from draftnet.pipeline_registry import register_pipelines
from draftnet.settings import BASE_ENV, CONF_SOURCE, DEFAULT_RUN_ENV, PROJECT_ROOT

logger = logging.getLogger(__name__)

PARAMS_KEY = "draft_network"


def load_parameters(conf_source: Optional[Path] = None, env: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the draft network parameters from the project configuration.

    Args:
        conf_source: Configuration directory, ``conf/`` under the project root by default
        env: Kedro environment layered over ``base``

    Returns:
        Dict[str, Any]: The ``draft_network`` parameters
    """
    conf_source = Path(conf_source) if conf_source else PROJECT_ROOT / CONF_SOURCE
    loader = OmegaConfigLoader(
        conf_source=str(conf_source),
        env=env,
        base_env=BASE_ENV,
        default_run_env=DEFAULT_RUN_ENV,
    )
    return dict(loader["parameters"].get(PARAMS_KEY, {}))


def run_pipeline(
    params: Dict[str, Any],
    game_logs: Optional[pl.DataFrame] = None,
) -> Dict[str, Any]:
    """
    Run the draft network pipeline.

    Passing ``game_logs`` skips acquisition of the logs, so one fetched
    snapshot can serve several draft classes.

    Args:
        params: The ``draft_network`` parameters
        game_logs: Optional game log snapshot to reuse

    Returns:
        Dict[str, Any]: ``graph`` (the teammate graph) and ``figure`` (saved figure path)
    """
    pipeline = register_pipelines()[PARAMS_KEY]
    build = pipeline.to_nodes("build_draft_network")
    if game_logs is not None:
        build = build.only_nodes("fetch_draft_roster", "build_draft_network")
    plot = pipeline.only_nodes("plot_draft_network")

    catalog = DataCatalog({
        f"params:{PARAMS_KEY}": MemoryDataset(params),
        "game_logs": (
            MemoryDataset(game_logs, copy_mode="assign")
            if game_logs is not None
            else MemoryDataset(copy_mode="assign")
        ),
        "draft_roster": MemoryDataset(copy_mode="assign"),
        "draft_network_graph": MemoryDataset(copy_mode="assign"),
        "draft_network_figure": MemoryDataset(copy_mode="assign"),
    })

    runner = SequentialRunner()
    # Two runs so the graph is a pipeline output and survives dataset release
    logger.info("Running draft network construction")
    runner.run(build, catalog)
    logger.info("Running draft network rendering")
    runner.run(plot, catalog)

    return {
        "graph": catalog.load("draft_network_graph"),
        "figure": catalog.load("draft_network_figure"),
    }


if __name__ == "__main__":
    run_pipeline(load_parameters())
