"""
Centralized constants for vibeguide.

Grid geometry, API defaults and timer intervals live here so the layout
generator, navigator and TUI agree on the same numbers.
"""

from pathlib import Path

VIBEGUIDE_CONFIG_DIR = Path.home() / ".config" / "vibeguide"

# =============================================================================
# GRID LAYOUT
# =============================================================================

ROW_MAX_WIDTH = 45  # Grid-cell units per row
ALIGNMENT_MODULUS = 3  # Wide blocks never start one unit before a multiple of this
ROW_REPEAT_INTERVAL = 4  # Every Nth layout row copies the previous row's widths
BLANK_ROW_COUNT = 4  # Blank rows before (optional) and after the content rows

# Widths drawn from in random mode
RANDOM_BLOCK_WIDTHS = (2, 3, 4, 6)

# Name length thresholds for size-by-name mode
WIDE_NAME_LENGTH = 12
MEDIUM_NAME_LENGTH = 8
WIDE_BLOCK_WIDTH = 6
MEDIUM_BLOCK_WIDTH = 4
NARROW_BLOCK_WIDTH = 2

# =============================================================================
# VIEWPORT & NAVIGATION
# =============================================================================

SCROLL_SNAP_ROWS = 4  # Vertical scroll aligns to multiples of this many rows
SCROLL_SNAP_COLUMNS = 4  # Horizontal scroll aligns to multiples of this many units

ROW_HEIGHT = 3  # Terminal lines per grid row
UNIT_WIDTH = 4  # Terminal columns per grid-cell unit
CHANNEL_LABEL_WIDTH = 18  # Channel column at the start of each row strip

# =============================================================================
# TIMERS (seconds)
# =============================================================================

AUTO_SCROLL_INTERVAL_SECONDS = 4.0
FEATURED_ROTATE_INTERVAL_SECONDS = 12.0

# =============================================================================
# API DEFAULTS
# =============================================================================

DEFAULT_API_URL = "http://localhost:8080"
API_TIMEOUT_SECONDS = 10.0

DEFAULT_CATEGORY_LIMIT = 20
DEFAULT_STREAM_LIMIT = 20
DEFAULT_TOP_STREAM_COUNT = 100
MIN_QUERY_LIMIT = 1
MAX_QUERY_LIMIT = 100

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS: dict[str, dict] = {
    "VIBEGUIDE_API_URL": {
        "description": "Base URL of the vibeguide backend API",
        "default": DEFAULT_API_URL,
        "valid_values": None,
    },
    "VIBEGUIDE_CATEGORY_LIMIT": {
        "description": "Number of top categories to show as rows",
        "default": str(DEFAULT_CATEGORY_LIMIT),
        "valid_values": None,
    },
    "VIBEGUIDE_STREAM_LIMIT": {
        "description": "Number of streams fetched per category",
        "default": str(DEFAULT_STREAM_LIMIT),
        "valid_values": None,
    },
    "VIBEGUIDE_AUTO_SCROLL": {
        "description": "Scroll the guide automatically when idle",
        "default": "true",
        "valid_values": ["true", "false"],
    },
}
