"""
Background location refresh for GolfTrack map views.

Polls the location provider on a fixed interval (30 s by default),
accepting a fix up to 30 s old so the receiver isn't hammered, and
reports the position and the distance to the current hole's pin.
"""

import asyncio
import logging
import time
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from golftrack.gps import distance_to_pin
from golftrack.location import (
    LocationProvider,
    PositionError,
    PositionOptions,
    get_current_position,
)
from golftrack.models.course import Hole
from golftrack.utils.constants import (
    DEFAULT_LOCATION_TIMEOUT_MS,
    REFRESH_INTERVAL_S,
    REFRESH_MAXIMUM_AGE_MS,
)

logger = logging.getLogger(__name__)


class LocationPoller(QThread):
    """Periodically refreshes the player's position.

    Signals:
        position_updated(Coordinate): New position available.
        pin_distance_updated(int): Yards to the current hole's green.
        error_occurred(str): A refresh failed; polling continues.
        started_polling(): Emitted when the loop starts.
        stopped_polling(): Emitted when the loop exits.
    """

    position_updated = pyqtSignal(object)  # Coordinate
    pin_distance_updated = pyqtSignal(int)
    error_occurred = pyqtSignal(str)
    started_polling = pyqtSignal()
    stopped_polling = pyqtSignal()

    def __init__(
        self,
        provider: LocationProvider,
        hole: Optional[Hole] = None,
        interval_s: float = REFRESH_INTERVAL_S,
        maximum_age_ms: int = REFRESH_MAXIMUM_AGE_MS,
        timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS,
        parent=None,
    ):
        """
        Args:
            provider: Location source.
            hole: Hole whose pin distance is reported (optional).
            interval_s: Seconds between refreshes.
            maximum_age_ms: Staleness tolerance passed to each request.
            timeout_ms: Per-request timeout.
        """
        super().__init__(parent)
        self._running = False
        self._provider = provider
        self._hole = hole
        self._interval_s = interval_s
        self._options = PositionOptions(
            timeout_ms=timeout_ms, maximum_age_ms=maximum_age_ms
        )
        self._update_count = 0

    @property
    def interval_s(self) -> float:
        return self._interval_s

    def set_hole(self, hole: Optional[Hole]):
        """Change the hole whose pin distance is reported."""
        self._hole = hole

    def run(self):
        """Main thread loop: refresh, then wait out the interval."""
        self._running = True
        logger.info(f"Location polling started (every {self._interval_s}s)")
        self.started_polling.emit()

        while self._running:
            self._poll_once()

            # Sleep in small increments so we can stop quickly
            elapsed = 0.0
            while elapsed < self._interval_s and self._running:
                time.sleep(0.1)
                elapsed += 0.1

        self.stopped_polling.emit()
        logger.info("Location polling stopped")

    def _poll_once(self):
        """Fetch one position and emit the results."""
        try:
            position = asyncio.run(
                get_current_position(self._provider, self._options)
            )
        except PositionError as e:
            logger.warning(f"Location refresh failed: {e}")
            self.error_occurred.emit(str(e))
            return

        self._update_count += 1
        self.position_updated.emit(position)
        if self._hole is not None:
            self.pin_distance_updated.emit(distance_to_pin(position, self._hole))

    def trigger_update(self):
        """Refresh immediately (for a UI button / testing)."""
        self._poll_once()

    def stop(self):
        """Signal the thread to stop."""
        self._running = False

    def is_polling(self) -> bool:
        return self._running
