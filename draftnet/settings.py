"""Project settings."""

from pathlib import Path

# This is the location of the project configuration directory
CONF_SOURCE = "conf"

# The location of the project root directory.
PROJECT_ROOT = Path(__file__).parents[1]  # Going up from draftnet to the project root

# Configuration environments
BASE_ENV = "base"
DEFAULT_RUN_ENV = "local"

# Output locations
DEFAULT_VISUALS_DIR = Path("visuals")

# 1946-47 is the first BAA season and 1947 the first draft
FIRST_SEASON = 1947

# Seconds to wait on a single stats.nba.com request
REQUEST_TIMEOUT = 60
