"""
Draft network pipeline for the draft network analysis.
"""

from .nodes import create_pipeline


__all__ = ["create_pipeline"]
