"""
Geodesic, scoring, and analytics constants for GolfTrack.

Distance figures match what the round-tracking maps display: the
Haversine result in metres is converted with a flat 1.094 yards/metre
factor and rounded to whole yards.
"""

# =============================================================================
# Geodesy
# =============================================================================

EARTH_RADIUS_M = 6_371_000         # Mean Earth radius (metres)
METERS_TO_YARDS = 1.094            # m → yards, as shown on the GPS panel
METERS_PER_DEGREE_LAT = 111_320    # Approximate metres per degree of latitude

# =============================================================================
# Position acquisition defaults (geolocation API semantics)
# =============================================================================

DEFAULT_LOCATION_TIMEOUT_MS = 15_000
DEFAULT_LOCATION_MAXIMUM_AGE_MS = 0    # Always request a fresh fix
REFRESH_INTERVAL_S = 30                # Map views poll every 30 seconds
REFRESH_MAXIMUM_AGE_MS = 30_000        # ...accepting a fix up to 30 s old

# Platform geolocation error codes
POSITION_ERROR_PERMISSION_DENIED = 1
POSITION_ERROR_POSITION_UNAVAILABLE = 2
POSITION_ERROR_TIMEOUT = 3

# =============================================================================
# Shot tracking
# =============================================================================

MAX_SHOT_DISTANCE = 400            # Realistic ceiling for a single shot (yards)

LIES = ("tee", "fairway", "rough", "sand", "green")
GOOD_LIES = frozenset({"fairway", "green"})   # Lies counted as "accurate"

# Club/lie used when a shot is placed without an explicit selection
DEFAULT_TEE_CLUB = "Driver"
DEFAULT_APPROACH_CLUB = "7-Iron"
DEFAULT_TEE_LIE = "tee"
DEFAULT_APPROACH_LIE = "fairway"

DEFAULT_CLUBS = [
    "Driver", "3-Wood", "5-Wood", "Hybrid",
    "3-Iron", "4-Iron", "5-Iron", "6-Iron", "7-Iron", "8-Iron", "9-Iron",
    "PW", "SW", "LW", "Putter",
]

# =============================================================================
# Analytics
# =============================================================================

DEFAULT_HEAT_MAP_GRID_SIZE = 50

# Distance histogram buckets (yards): short < 100 <= medium < 200 <= long
SHORT_SHOT_MAX = 100
MEDIUM_SHOT_MAX = 200

_DAY_MS = 24 * 60 * 60 * 1000

TREND_WINDOWS_MS = {
    "week":   7 * _DAY_MS,
    "month": 30 * _DAY_MS,
    "season": 90 * _DAY_MS,
}

# =============================================================================
# Offline storage
# =============================================================================

STORAGE_QUOTA_BYTES = 5 * 1024 * 1024   # Same estimate the web client used
