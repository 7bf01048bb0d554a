"""
Teammate network analysis for NBA draft classes.

This package builds and renders the "teammate" graph of a draft class:
- Acquisition: season game logs and draft rosters from the NBA Stats API
- Graphs: team-season co-membership edges and career node statistics
- Pipeline: kedro nodes wiring acquisition, construction and rendering
"""
