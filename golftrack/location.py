"""
Position acquisition for GolfTrack.

Wraps a location provider (GPS receiver, simulator, or a fixed manual
position) behind a single coroutine, get_current_position(), that
mirrors the geolocation API contract:

  - high accuracy requested and no cached fixes accepted by default
  - one outstanding request per call, bounded by a timeout (15 s)
  - failures surfaced as typed PositionError subclasses

No retries are made here; periodic refresh is the job of
LocationPoller or the caller.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Optional

from golftrack.models.shot import Coordinate
from golftrack.utils.constants import (
    DEFAULT_LOCATION_MAXIMUM_AGE_MS,
    DEFAULT_LOCATION_TIMEOUT_MS,
    POSITION_ERROR_PERMISSION_DENIED,
    POSITION_ERROR_POSITION_UNAVAILABLE,
    POSITION_ERROR_TIMEOUT,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================

class PositionError(Exception):
    """Base class for position acquisition failures."""
    code = 0
    default_message = "Unable to get location"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class PermissionDeniedError(PositionError):
    code = POSITION_ERROR_PERMISSION_DENIED
    default_message = "Location access denied. Please enable location permissions."


class PositionUnavailableError(PositionError):
    code = POSITION_ERROR_POSITION_UNAVAILABLE
    default_message = "Location information unavailable. Please try again."


class PositionTimeoutError(PositionError):
    code = POSITION_ERROR_TIMEOUT
    default_message = "Location request timed out. Please try again."


# =============================================================================
# Options and fixes
# =============================================================================

@dataclass(frozen=True)
class PositionOptions:
    """Per-request acquisition options.

    Attributes:
        enable_high_accuracy: Ask the provider for its best fix.
        timeout_ms: Longest wait for a fix before PositionTimeoutError.
        maximum_age_ms: Oldest cached fix acceptable (0 = always fresh).
    """
    enable_high_accuracy: bool = True
    timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS
    maximum_age_ms: int = DEFAULT_LOCATION_MAXIMUM_AGE_MS

    def merged(self, **overrides) -> "PositionOptions":
        """Copy with caller overrides applied. None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


@dataclass(frozen=True)
class Fix:
    """A position reported by a provider.

    Attributes:
        coordinates: Reported position.
        accuracy_m: Estimated horizontal accuracy (metres).
        timestamp: time.monotonic() when the fix was taken.
    """
    coordinates: Coordinate
    accuracy_m: float = 0.0
    timestamp: float = field(default_factory=time.monotonic)

    @property
    def age_ms(self) -> float:
        return (time.monotonic() - self.timestamp) * 1000


# =============================================================================
# Providers
# =============================================================================

class LocationProvider:
    """Source of position fixes.

    Subclasses implement _acquire_fix(); the base class keeps the most
    recent fix so requests with a non-zero maximum_age_ms can reuse it.
    """

    def __init__(self):
        self._last_fix: Optional[Fix] = None

    @property
    def last_fix(self) -> Optional[Fix]:
        return self._last_fix

    async def get_fix(self, options: PositionOptions) -> Fix:
        """Return a fix satisfying `options`, reusing the cached one if fresh enough."""
        cached = self._last_fix
        if (options.maximum_age_ms > 0 and cached is not None
                and cached.age_ms <= options.maximum_age_ms):
            logger.debug(f"Using cached fix ({cached.age_ms:.0f} ms old)")
            return cached

        fix = await self._acquire_fix(options.enable_high_accuracy)
        self._last_fix = fix
        return fix

    async def _acquire_fix(self, enable_high_accuracy: bool) -> Fix:
        raise NotImplementedError


class StaticLocationProvider(LocationProvider):
    """Always reports the same position (manual entry, tests)."""

    def __init__(self, coordinates: Coordinate, accuracy_m: float = 0.0):
        super().__init__()
        self._coordinates = coordinates
        self._accuracy_m = accuracy_m

    async def _acquire_fix(self, enable_high_accuracy: bool) -> Fix:
        return Fix(self._coordinates, self._accuracy_m)


# =============================================================================
# Acquisition
# =============================================================================

async def get_current_position(
    provider: LocationProvider,
    options: Optional[PositionOptions] = None,
    **overrides,
) -> Coordinate:
    """Get the current position from `provider`.

    Args:
        provider: Where fixes come from.
        options: Base options (defaults to PositionOptions()).
        **overrides: Individual option overrides, e.g. maximum_age_ms=30000.

    Returns:
        The reported Coordinate.

    Raises:
        PermissionDeniedError: The user declined location access.
        PositionUnavailableError: The provider could not determine a fix.
        PositionTimeoutError: No fix within options.timeout_ms.
    """
    opts = (options or PositionOptions()).merged(**overrides)

    try:
        fix = await asyncio.wait_for(
            provider.get_fix(opts), timeout=opts.timeout_ms / 1000
        )
    except asyncio.TimeoutError:
        logger.warning(f"No position fix within {opts.timeout_ms} ms")
        raise PositionTimeoutError() from None

    logger.debug(
        f"Position fix: {fix.coordinates.latitude:.6f}, "
        f"{fix.coordinates.longitude:.6f} (±{fix.accuracy_m:.0f} m)"
    )
    return fix.coordinates
