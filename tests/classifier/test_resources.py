"""Tests for resource pressure monitors."""

from unittest import mock

import pytest

from dogcat_classifier.classifier.resources import (
    LoadAverageResourceMonitor,
    StaticResourceMonitor,
    ThermalState,
)


def test_thermal_states_are_ordered() -> None:
    """Test that states compare by severity."""
    assert ThermalState.NOMINAL < ThermalState.FAIR
    assert ThermalState.FAIR < ThermalState.SERIOUS
    assert ThermalState.SERIOUS < ThermalState.CRITICAL


def test_static_monitor_defaults_to_nominal() -> None:
    """Test the default static reading."""
    assert StaticResourceMonitor().thermal_state() == ThermalState.NOMINAL


@pytest.mark.parametrize(
    ("load", "expected"),
    [
        (0.0, ThermalState.NOMINAL),
        (2.9, ThermalState.NOMINAL),
        (3.0, ThermalState.FAIR),
        (6.0, ThermalState.SERIOUS),
        (12.0, ThermalState.CRITICAL),
        (40.0, ThermalState.CRITICAL),
    ],
)
def test_load_average_monitor(load: float, expected: ThermalState) -> None:
    """Test mapping of per-CPU load onto pressure levels."""
    monitor = LoadAverageResourceMonitor()

    with (
        mock.patch(
            "dogcat_classifier.classifier.resources.os.getloadavg",
            return_value=(load, 0.0, 0.0),
        ),
        mock.patch(
            "dogcat_classifier.classifier.resources.os.cpu_count",
            return_value=4,
        ),
    ):
        assert monitor.thermal_state() == expected


def test_load_average_unavailable() -> None:
    """Test platforms without a load average report nominal pressure."""
    monitor = LoadAverageResourceMonitor()

    with mock.patch(
        "dogcat_classifier.classifier.resources.os.getloadavg",
        side_effect=OSError,
    ):
        assert monitor.thermal_state() == ThermalState.NOMINAL
