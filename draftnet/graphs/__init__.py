"""
Graph analytics module for the draft network analysis.

This module builds and renders the draft-class teammate graph:
- Teammate edges: who shared a team in the same season?
- Node statistics: career scoring average and games played
- Visualization: force-directed rendering of the class network
"""
