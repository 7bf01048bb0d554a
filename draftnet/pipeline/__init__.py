"""Kedro pipelines for the draft network analysis."""
