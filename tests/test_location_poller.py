"""
Tests for the background location poller.

The poller is exercised through trigger_update() so no thread or event
loop needs to run.
"""

from golftrack.location import StaticLocationProvider
from golftrack.location_poller import LocationPoller
from golftrack.mock_location import MockLocationProvider
from golftrack.models.shot import Coordinate


class TestLocationPoller:
    """Tests for LocationPoller."""

    def test_emits_position(self, qtbot):
        position = Coordinate(40.001, -73.0)
        poller = LocationPoller(StaticLocationProvider(position))
        results = []
        poller.position_updated.connect(lambda c: results.append(c))

        poller.trigger_update()

        assert results == [position]

    def test_emits_pin_distance(self, qtbot, hole):
        poller = LocationPoller(StaticLocationProvider(hole.tee_coordinates), hole=hole)
        distances = []
        poller.pin_distance_updated.connect(lambda d: distances.append(d))

        poller.trigger_update()

        assert distances == [365]

    def test_no_pin_distance_without_hole(self, qtbot, hole):
        poller = LocationPoller(StaticLocationProvider(hole.tee_coordinates), hole=hole)
        poller.set_hole(None)
        distances = []
        poller.pin_distance_updated.connect(lambda d: distances.append(d))

        poller.trigger_update()

        assert distances == []

    def test_error_is_reported(self, qtbot):
        poller = LocationPoller(MockLocationProvider(preset="denied"))
        errors, positions = [], []
        poller.error_occurred.connect(lambda msg: errors.append(msg))
        poller.position_updated.connect(lambda c: positions.append(c))

        poller.trigger_update()

        assert positions == []
        assert len(errors) == 1
        assert "denied" in errors[0]

    def test_keeps_working_after_error(self, qtbot):
        provider = MockLocationProvider(preset="no_fix", seed=2)
        poller = LocationPoller(provider)
        errors, positions = [], []
        poller.error_occurred.connect(lambda msg: errors.append(msg))
        poller.position_updated.connect(lambda c: positions.append(c))

        poller.trigger_update()
        provider.set_preset("good_signal")
        poller.trigger_update()

        assert len(errors) == 1
        assert len(positions) == 1

    def test_not_polling_until_started(self, qtbot):
        poller = LocationPoller(StaticLocationProvider(Coordinate(0.0, 0.0)))
        assert not poller.is_polling()
