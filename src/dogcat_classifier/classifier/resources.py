"""Device resource pressure signals consulted before submitting work."""

import enum
import logging
import os
from abc import ABC, abstractmethod


class ThermalState(enum.IntEnum):
    """Coarse device pressure levels, ordered from least to most severe."""

    NOMINAL = 0
    FAIR = 1
    SERIOUS = 2
    CRITICAL = 3


class ResourceMonitor(ABC):
    """Reports the current device resource pressure."""

    @abstractmethod
    def thermal_state(self) -> ThermalState:
        """Return the current pressure level."""
        message = "Subclasses must implement this method"
        raise NotImplementedError(message)


class StaticResourceMonitor(ResourceMonitor):
    """Always reports the state it was created with."""

    def __init__(self, state: ThermalState = ThermalState.NOMINAL) -> None:
        """Initialize with a fixed state.

        Args:
            state: The state to report. Can be changed later through the
                ``state`` attribute.

        """
        self.state = state

    def thermal_state(self) -> ThermalState:
        """Return the configured state."""
        return self.state


class LoadAverageResourceMonitor(ResourceMonitor):
    """Derives pressure from the one-minute load average per CPU.

    This is a heuristic: a host whose run queue is several times its CPU
    count is treated as critically loaded.
    """

    def __init__(
        self,
        fair: float = 0.75,
        serious: float = 1.5,
        critical: float = 3.0,
    ) -> None:
        """Initialize the per-CPU load thresholds.

        Args:
            fair: Load per CPU at which the state becomes FAIR.
            serious: Load per CPU at which the state becomes SERIOUS.
            critical: Load per CPU at which the state becomes CRITICAL.

        """
        self.logger = logging.getLogger(__name__)
        self.thresholds = (
            (critical, ThermalState.CRITICAL),
            (serious, ThermalState.SERIOUS),
            (fair, ThermalState.FAIR),
        )

    def thermal_state(self) -> ThermalState:
        """Return the state matching the current load average."""
        try:
            load, _, _ = os.getloadavg()
        except (AttributeError, OSError):
            # Not available on this platform
            return ThermalState.NOMINAL

        per_cpu = load / (os.cpu_count() or 1)
        for threshold, state in self.thresholds:
            if per_cpu >= threshold:
                self.logger.debug(
                    "Load %.2f per CPU maps to %s", per_cpu, state.name
                )
                return state
        return ThermalState.NOMINAL
