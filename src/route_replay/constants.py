"""Global constants for the application."""

# Map defaults (Southern California)
DEFAULT_MAP_CENTER = (34.0, -118.4)  # (lat, lng)
DEFAULT_MAP_ZOOM = 11
MAX_MAP_ZOOM = 18
ZOOM_SNAP = 0.1  # Fractional zoom granularity when fitting routes
MAP_FIT_BOUNDS_PADDING = (50, 50)  # Pixels (horizontal, vertical)
TILE_SIZE = 256  # Web Mercator world size at zoom 0
MAX_MERCATOR_LATITUDE = 85.0511287798

# Capture region
VIEWPORT_PADDING = 0.9  # Region may use 90% of the viewport
UI_CHROME_ALLOWANCE = 100  # Pixels reserved below/above for controls
REGION_SANITY_LIMIT = 10_000  # Pixels; larger positions/sizes are rejected
DEFAULT_VIRTUAL_VIEWPORT = (1600, 1000)  # Screen size assumed when running headless

# Interactive animation duration in seconds
ANIMATION_DURATION_MIN = 1
ANIMATION_DURATION_MAX = 60
ANIMATION_DURATION_DEFAULT = 10

# Export limits
EXPORT_MIN_DIMENSION = 100
EXPORT_MAX_DIMENSION = 7680
EXPORT_MIN_FRAME_RATE = 1
EXPORT_MAX_FRAME_RATE = 120
EXPORT_MAX_DURATION = 3600  # Seconds
RENDER_ATTEMPTS = 2  # One retry per frame before the export aborts
PROGRESS_LOG_INTERVAL = 30  # Log export progress every N frames

# Export presets
EXPORT_RESOLUTIONS = {
    "720p": (1280, 720),
    "1080p": (1920, 1080),
    "1440p": (2560, 1440),
    "4k": (3840, 2160),
}
EXPORT_FRAME_RATES = (24, 30, 60)
DEFAULT_EXPORT_RESOLUTION = "1920x1080"
DEFAULT_EXPORT_FRAME_RATE = 30

# Route styling
DEFAULT_ROUTE_COLOR = "#3388ff"
ROUTE_WIDTH = 4
STATIC_ROUTE_COLOR = "#CCCCCC"
STATIC_ROUTE_WIDTH = 2
STATIC_ROUTE_OPACITY = 0.5
BACKGROUND_COLOR = "#F5F5F5"

# Current position marker
MARKER_OUTER_RADIUS = 8
MARKER_INNER_RADIUS = 5
MARKER_RING_COLOR = "#FFFFFF"
MARKER_OUTLINE_COLOR = "#000000"
MARKER_OUTLINE_WIDTH = 2

# Debug overlay
DEBUG_COLOR = "#00FF00"
DEBUG_CROSSHAIR_SIZE = 5
DEBUG_SAMPLE_STEP = 10  # Crosshair on every Nth coordinate

# Multi-color mode
COLOR_PALETTE = (
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#14b8a6",  # teal
    "#3b82f6",  # blue
    "#8b5cf6",  # purple
    "#ec4899",  # pink
)
