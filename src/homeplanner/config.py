"""
Configuration for the Home Planner geometry engine.

All lengths stored on rooms are in feet; positions on the blueprint are in
pixels. The constants below tie the two together.
"""

# --------------------------------------------------------------------------- #
# Global parameters
# --------------------------------------------------------------------------- #

# Units
PIXELS_PER_FOOT = 15  # Pixels representing one foot on the blueprint
GRID_SNAP_FEET = 0.5  # Grid quantum in feet

# Geometry
MIN_SIZE_FEET = 2.0  # Smallest width/length a room may be resized to
SNAP_THRESHOLD_PX = 5.0  # Max distance between two walls considered touching
FULL_OPENING_RATIO = 0.8  # Opening wider than this share of its wall removes the panel

# Sunlight
LIGHT_RAY_LENGTH_PX = 500.0  # Throw distance of a light wedge

# ASCII diagram
DIAGRAM_SCALE_X = 2  # Characters per foot horizontally
DIAGRAM_SCALE_Y = 1  # Characters per foot vertically
DIAGRAM_PADDING = 1  # Blank cells around the drawing

# Editor defaults
DEFAULT_ROOM_SIZE_FEET = (10.0, 10.0)
DEFAULT_ROOM_POSITION_PX = (50.0, 50.0)

# Feature sizes (feet) used when a feature is added without an explicit size
DEFAULT_FEATURE_SIZES = {
    "door": 3.0,
    "window": 4.0,
    "outlet": 0.5,
    "opening": 3.0,
    "sliding_door": 6.0,
    "french_door": 5.0,
    "garage_door": 8.0,
}

# Colors
ROOM_COLORS = {
    "Living Room": "#fef08a",
    "Bedroom": "#bfdbfe",
    "Kitchen": "#fed7aa",
    "Bathroom": "#bbf7d0",
    "Dining Room": "#fecaca",
    "Office": "#e0e7ff",
    "Garage": "#d1d5db",
    "Stairs": "#e5e7eb",
    "Hallway": "#f3f4f6",
    "Custom": "#e9d5ff",
}
DEFAULT_WALL_COLOR = "#E2E8F0"
DEFAULT_FURNITURE_COLOR = "#A0522D"
