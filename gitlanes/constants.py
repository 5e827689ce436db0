"""
Centralized constants for Gitlanes.

Layout metrics and colors shared by the headless graph core and the
Qt front end live here so both agree on the geometry.
"""

# Grid geometry (pixels)
COLUMN_OFFSET = 20
COLUMN_WIDTH = 15
ROW_OFFSET = 10
ROW_HEIGHT = 20

# Edge routing
MARKER_GAP = 7
BEND_OFFSET = ROW_HEIGHT / 2
EDGE_WIDTH = 2

# Edge colors, cycled at every branch or merge
EDGE_COLORS = [
    "#7f0000",
    "#007f00",
    "#0000af",
    "#000000",
    "#7f7f00",
    "#7f007f",
    "#007f7f",
]

# Commit markers
MARKER_FILL = "#afafaf"
MARKER_STROKE = "#000000"
PENDING_RADIUS = 7
PENDING_STROKE_WIDTH = 1
LOADED_RADIUS = 6
LOADED_STROKE_WIDTH = 5

# Diff halo
HALO_WIDTH = 4
INSERTIONS_COLOR = "green"
DELETIONS_COLOR = "red"

# Reference labels: (prefix, kind, color), matched in this order
REF_CATEGORIES = [
    ("refs/heads/", "branch", "#00ff00"),
    ("refs/remotes/", "remote", "#ffaf7f"),
    ("refs/tags/", "tag", "#ffff00"),
]
OTHER_REF_COLOR = "#7f7f7f"
LABEL_TEXT_X = 5
LABEL_TEXT_Y = 15
LABEL_PADDING = 10
LABEL_GAP = 5
LABEL_FONT_SIZE = 12

# Row background stripes
LIGHT_ROW_COLOR = "#ffffff"
DARK_ROW_COLOR = "#efefef"

# Minimum length of a hash prefix accepted by lookups
MIN_PREFIX_LENGTH = 4

# History paging
DEFAULT_PAGE_SIZE = 50
SHORT_HASH_LENGTH = 6

# Initial main window size (width, height)
DEFAULT_WINDOW_SIZE = (1000, 800)

# Settings location
SETTINGS_FILE = "~/.config/gitlanes/settings.json"
