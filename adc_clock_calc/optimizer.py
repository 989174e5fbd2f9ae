#!/usr/bin/env python3
"""ADC sampling configuration search."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .clock_tree import enumerate_clock_frequencies, sorted_frequencies
from .errors import EmptyCandidateSetError

__all__ = [
    "ADCConfig",
    "ConfigOptimizer",
    "OptimizationPolicy",
    "SamplingTimeMenu",
    "default_optimizer",
    "find_multiple_settings",
    "find_optimal_settings",
]

DEFAULT_SAMPLING_TIMES = (1.5, 2.5, 8.5, 16.5, 32.5, 64.5, 387.5, 810.5)
DEFAULT_OVERHEAD = 8.5  # Tsar, in ADC cycles

# PreferHighClock accepts candidates up to this factor of the best error
PREFER_HIGH_CLOCK_TOLERANCE = 1.5


class OptimizationPolicy(Enum):
    """An enumeration class to represent ranking policies.

    Attributes:
        MINIMIZE_DELTA : closest achieved sample rate, first encountered on ties
        PREFER_HIGH_CLOCK : highest clock among candidates close enough to the best error
        BALANCED : closest achieved sample rate, highest clock on ties
    """

    MINIMIZE_DELTA = "minimize-delta"
    PREFER_HIGH_CLOCK = "prefer-high-clock"
    BALANCED = "balanced"


@dataclass(frozen=True)
class ADCConfig:
    """A candidate ADC clock and sampling time setting."""

    clock_frequency: float  # Fadc_ker_ck, Hz
    sampling_time: float  # ADC cycles
    conversion_time: float  # Seconds
    achieved_sample_rate: float  # Hz

    @classmethod
    def from_settings(
        cls, clock_frequency: float, sampling_time: float, overhead: float
    ) -> "ADCConfig":
        """Build a configuration and derive its timings.

        Args:
            clock_frequency (float): The ADC kernel clock, in Hz
            sampling_time (float): The sampling time, in ADC cycles
            overhead (float): The conversion overhead, in ADC cycles

        Returns:
            ADCConfig: The configuration
        """
        conversion_time = (sampling_time + overhead) / clock_frequency
        return cls(
            clock_frequency=clock_frequency,
            sampling_time=sampling_time,
            conversion_time=conversion_time,
            achieved_sample_rate=1 / conversion_time,
        )

    def error(self, target_sample_rate: float) -> float:
        """Absolute distance between the achieved and the target sample rate."""
        return abs(self.achieved_sample_rate - target_sample_rate)

    def __str__(self) -> str:
        return (
            "Optimal ADC Settings:\n"
            f"- Fadc_ker_ck: {self.clock_frequency / 1_000_000.0} MHz\n"
            f"- Sampling Time: {self.sampling_time} cycles\n"
            f"- Total Conversion Time: {self.conversion_time * 1_000_000:.2f} µs\n"
            f"- Achieved Sample Rate: {self.achieved_sample_rate:.0f} Hz"
        )


@dataclass(frozen=True)
class SamplingTimeMenu:
    """Allowed sampling times and the fixed conversion overhead, in ADC cycles."""

    sampling_times: Tuple[float, ...] = DEFAULT_SAMPLING_TIMES
    overhead: float = DEFAULT_OVERHEAD


class ConfigOptimizer:
    """Search ADC configurations approaching a target sample rate.

    The menu is read at every search, so replacing it only affects the
    searches that follow. Nothing here is locked: changing the menu while
    another thread is searching is not supported.
    """

    def __init__(
        self,
        menu: Optional[SamplingTimeMenu] = None,
        frequencies: Optional[Iterable[float]] = None,
    ) -> None:
        """Initialize the optimizer.

        Args:
            menu (Optional[SamplingTimeMenu]): The sampling times and overhead to use. Defaults to the STM32H7 ones.
            frequencies (Optional[Iterable[float]]): The clock frequencies to consider, in Hz. Defaults to the enumerated clock tree.
        """
        self.menu = menu if menu is not None else SamplingTimeMenu()
        if frequencies is None:
            frequencies = enumerate_clock_frequencies()
        self._frequencies = sorted_frequencies(set(frequencies))

    @property
    def frequencies(self) -> List[float]:
        """The candidate clock frequencies, highest first."""
        return list(self._frequencies)

    @property
    def sampling_times(self) -> Tuple[float, ...]:
        return self.menu.sampling_times

    @sampling_times.setter
    def sampling_times(self, sampling_times: Sequence[float]) -> None:
        self.menu = SamplingTimeMenu(tuple(sampling_times), self.menu.overhead)

    @property
    def overhead(self) -> float:
        return self.menu.overhead

    @overhead.setter
    def overhead(self, overhead: float) -> None:
        self.menu = SamplingTimeMenu(self.menu.sampling_times, overhead)

    def restricted_to(self, frequencies: Iterable[float]) -> "ConfigOptimizer":
        """Get an optimizer only considering some of the clock frequencies.

        Args:
            frequencies (Iterable[float]): The frequencies to keep, matched exactly

        Returns:
            ConfigOptimizer: A new optimizer sharing the current menu
        """
        allowed = set(frequencies)
        return ConfigOptimizer(
            self.menu, [f for f in self._frequencies if f in allowed]
        )

    def candidates(self) -> List[ADCConfig]:
        """Build every (clock frequency, sampling time) configuration.

        Returns:
            List[ADCConfig]: The configurations, frequency major
        """
        menu = self.menu
        return [
            ADCConfig.from_settings(frequency, sampling_time, menu.overhead)
            for frequency in self._frequencies
            for sampling_time in menu.sampling_times
        ]

    @staticmethod
    def _rank(configs: List[ADCConfig], target_sample_rate: float) -> List[ADCConfig]:
        """Order by ascending error, then by descending clock frequency."""
        return sorted(
            configs,
            key=lambda c: (c.error(target_sample_rate), -c.clock_frequency),
        )

    def find_optimal_settings(
        self,
        target_sample_rate: float,
        policy: OptimizationPolicy = OptimizationPolicy.BALANCED,
    ) -> ADCConfig:
        """Find the best configuration according to a policy.

        Args:
            target_sample_rate (float): The target sample rate, in Hz
            policy (OptimizationPolicy): The ranking policy. Defaults to BALANCED.

        Raises:
            EmptyCandidateSetError: There is no clock frequency or no sampling time to pick from

        Returns:
            ADCConfig: The best configuration
        """
        configs = self.candidates()
        if not configs:
            raise EmptyCandidateSetError(
                f"No candidate to rank ({len(self._frequencies)} clock frequencies, "
                f"{len(self.menu.sampling_times)} sampling times)"
            )

        best_error = min(c.error(target_sample_rate) for c in configs)

        if policy is OptimizationPolicy.MINIMIZE_DELTA:
            return min(configs, key=lambda c: c.error(target_sample_rate))

        if policy is OptimizationPolicy.PREFER_HIGH_CLOCK:
            tolerated = [
                c
                for c in configs
                if c.error(target_sample_rate)
                <= best_error * PREFER_HIGH_CLOCK_TOLERANCE
            ]
            return max(tolerated, key=lambda c: c.clock_frequency)

        return self._rank(configs, target_sample_rate)[0]

    def find_multiple_settings(
        self, target_sample_rate: float, max_results: int = 5
    ) -> List[ADCConfig]:
        """Find the best configurations, ranked as the BALANCED policy does.

        Args:
            target_sample_rate (float): The target sample rate, in Hz
            max_results (int): The maximum number of configurations to return. Defaults to 5.

        Returns:
            List[ADCConfig]: Up to max_results configurations, best first
        """
        if max_results <= 0:
            return []
        return self._rank(self.candidates(), target_sample_rate)[:max_results]


_default_optimizer: Optional[ConfigOptimizer] = None


def default_optimizer() -> ConfigOptimizer:
    """Get the shared optimizer used by the module level helpers."""
    global _default_optimizer
    if _default_optimizer is None:
        _default_optimizer = ConfigOptimizer()
    return _default_optimizer


def find_optimal_settings(
    target_sample_rate: float,
    policy: OptimizationPolicy = OptimizationPolicy.BALANCED,
) -> ADCConfig:
    """Find the best configuration with the shared optimizer."""
    return default_optimizer().find_optimal_settings(target_sample_rate, policy)


def find_multiple_settings(
    target_sample_rate: float, max_results: int = 5
) -> List[ADCConfig]:
    """Find the best configurations with the shared optimizer."""
    return default_optimizer().find_multiple_settings(target_sample_rate, max_results)
