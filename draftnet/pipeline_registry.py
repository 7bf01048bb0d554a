"""Project pipelines."""

from typing import Dict

from kedro.pipeline import Pipeline

from draftnet.pipeline.draft_network import create_pipeline as create_draft_network_pipeline


def register_pipelines() -> Dict[str, Pipeline]:
    """Register the project's pipelines."""
    draft_network_pipeline = create_draft_network_pipeline()

    return {
        "__default__": draft_network_pipeline,
        "draft_network": draft_network_pipeline,
    }
