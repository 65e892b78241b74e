# src/sixdeg/utils/constants.py

"""
Shared defaults for sixdeg analysis.

These are the built-in values used when neither analysis.ini nor the CLI
overrides them.
"""

# "Six degrees of separation"
DEFAULT_RADIUS = 6

# Rows listed in "top vertices by number of neighbors"
DEFAULT_TOP_N = 5

# Sample rows printed for adjacency lists / distance rows
DEFAULT_SAMPLES = 5

DEFAULT_STRATEGY = "sequential"

# SNAP ego-Facebook combined edge list
DEFAULT_EDGE_FILE = "facebook_combined.txt"

CONFIG_FILENAME = "analysis.ini"
CONFIG_SECTION = "analysis"

# Names registered in analytics/distances.py
STRATEGIES = ("sequential", "threads", "processes")
