"""
Configuration constants for the path-trace visualizer.

Tunable parameters live here.  Anything deployment-specific can be
overridden through environment variables.
"""

import os

# =============================================================================
# Heuristic Configuration
# =============================================================================

# Canvas pixels per unit of edge weight. Euclidean / Manhattan estimates are
# divided by this so they land on the same scale as hand-entered weights.
HEURISTIC_SCALE = 50.0

# Mean earth radius for the haversine heuristic, in km
EARTH_RADIUS_KM = 6371.0

# Heuristic used by A* when the caller does not pick one
DEFAULT_HEURISTIC = "euclidean"

# =============================================================================
# Input Limits
# =============================================================================

# The engines snapshot every map on every step, so memory grows with
# steps × nodes. The HTTP layer refuses graphs above these sizes.
MAX_NODES = int(os.environ.get("MAX_NODES", "200"))
MAX_EDGES = int(os.environ.get("MAX_EDGES", "2000"))

# =============================================================================
# Playback Configuration
# =============================================================================

# Speed preset a new Stepper starts with (see engine.stepper.SPEED_PRESETS)
DEFAULT_SPEED = "medium"

# =============================================================================
# Server Configuration
# =============================================================================

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5000"))
DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
