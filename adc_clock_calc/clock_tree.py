#!/usr/bin/env python3
"""STM32H7 ADC kernel clock enumeration."""

from functools import lru_cache
from typing import FrozenSet, Iterable, List, NamedTuple, Tuple

import numpy as np

__all__ = [
    "ADC_SCLK_PRESCALERS",
    "ClockTree",
    "OutputPath",
    "enumerate_clock_frequencies",
    "preferred_frequencies",
    "sorted_frequencies",
]

# Typical HSE/HSI input oscillators
OSCILLATOR_FREQUENCIES = (8_000_000.0, 16_000_000.0, 25_000_000.0)

PLL_MULTIPLIERS = tuple(range(50, 251))  # PLLN
PLL_INPUT_DIVIDERS = (1, 2, 3, 4, 5, 6, 8, 10)  # PLLM

# Applied before the mux
ADC_KER_CK_PRESCALERS = (1, 2, 4, 6, 8, 10, 12, 16, 32, 64, 128, 256)

# Separate sclk path, not part of the kernel clock enumeration
ADC_SCLK_PRESCALERS = (1, 2, 4)

# Ceiling of the PLL outputs and of the prescaled mux input
ADC_INPUT_MAX_FREQUENCY = 160_000_000.0

# Fadc_ker_ck band accepted by CubeMX, after the fixed /2 block
ADC_KERNEL_MIN_FREQUENCY = 1_666_667.0
ADC_KERNEL_MAX_FREQUENCY = 80_000_000.0


class OutputPath(NamedTuple):
    """A PLL output feeding the ADC kernel clock mux.

    Attributes:
        name : the PLL channel name, as shown in CubeMX
        dividers : the output dividers selectable for this channel
        max_frequency : the highest frequency allowed out of this channel
    """

    name: str
    dividers: Tuple[int, ...]
    max_frequency: float


PLL_OUTPUT_PATHS = (
    OutputPath("PLL2_P", (2, 4, 6, 8, 10, 12), ADC_INPUT_MAX_FREQUENCY),
    OutputPath("PLL3_R", (2, 4, 6, 8), ADC_INPUT_MAX_FREQUENCY),
)


class ClockTree:
    """Fixed STM32H7 clock topology between the oscillators and the ADC."""

    def __init__(
        self,
        oscillators: Iterable[float] = OSCILLATOR_FREQUENCIES,
        multipliers: Iterable[int] = PLL_MULTIPLIERS,
        input_dividers: Iterable[int] = PLL_INPUT_DIVIDERS,
        output_paths: Iterable[OutputPath] = PLL_OUTPUT_PATHS,
        prescalers: Iterable[int] = ADC_KER_CK_PRESCALERS,
        band: Tuple[float, float] = (
            ADC_KERNEL_MIN_FREQUENCY,
            ADC_KERNEL_MAX_FREQUENCY,
        ),
    ) -> None:
        """Initialize the clock tree tables.

        Args:
            oscillators (Iterable[float]): Input oscillator frequencies, in Hz.
            multipliers (Iterable[int]): PLL multiplier (N) values.
            input_dividers (Iterable[int]): PLL input divider (M) values.
            output_paths (Iterable[OutputPath]): PLL outputs feeding the ADC mux.
            prescalers (Iterable[int]): ADC prescalers applied before the mux.
            band (Tuple[float, float]): Inclusive (low, high) bounds of the final kernel clock, in Hz.
        """
        self._oscillators = np.array(tuple(oscillators), dtype=np.float64)
        self._multipliers = np.array(tuple(multipliers), dtype=np.float64)
        self._input_dividers = np.array(tuple(input_dividers), dtype=np.float64)
        self._output_paths = tuple(output_paths)
        self._prescalers = np.array(tuple(prescalers), dtype=np.float64)
        self._band = band

    def _pll_vco_frequencies(self) -> np.ndarray:
        """Compute every oscillator * N / M combination."""
        vco = (
            self._oscillators[:, None, None] * self._multipliers[None, :, None]
        ) / self._input_dividers[None, None, :]
        return vco.ravel()

    def _mux_frequencies(self, vco: np.ndarray, path: OutputPath) -> np.ndarray:
        """Compute the mux output frequencies reachable through one PLL output.

        Args:
            vco (np.ndarray): The PLL internal frequencies
            path (OutputPath): The PLL output to go through

        Returns:
            np.ndarray: The doubled mux output frequencies
        """
        dividers = np.array(path.dividers, dtype=np.float64)

        output = (vco[:, None] / dividers[None, :]).ravel()
        output = output[output <= path.max_frequency]

        prescaled = (output[:, None] / self._prescalers[None, :]).ravel()
        prescaled = prescaled[prescaled <= path.max_frequency]

        return prescaled * 2  # The mux doubles the frequency

    def enumerate(self) -> FrozenSet[float]:
        """Enumerate every ADC kernel clock frequency reachable through the tree.

        Values are deduplicated with exact floating point equality, so two PLL
        settings landing a rounding error apart are reported as two frequencies.

        Returns:
            FrozenSet[float]: The valid Fadc_ker_ck values, in Hz
        """
        vco = self._pll_vco_frequencies()

        stages = [self._mux_frequencies(vco, path) for path in self._output_paths]
        if not stages:
            return frozenset()

        mux = np.unique(np.concatenate(stages))

        kernel = mux / 2  # Fixed /2 block
        low, high = self._band
        kernel = kernel[(kernel >= low) & (kernel <= high)]

        return frozenset(kernel.tolist())


@lru_cache(maxsize=None)
def enumerate_clock_frequencies() -> FrozenSet[float]:
    """Enumerate the ADC kernel clock frequencies of the STM32H7 clock tree.

    The result is computed once and shared by every caller.

    Returns:
        FrozenSet[float]: The valid Fadc_ker_ck values, in Hz
    """
    return ClockTree().enumerate()


def sorted_frequencies(frequencies: Iterable[float]) -> List[float]:
    """Materialize frequencies highest first."""
    return sorted(frequencies, reverse=True)


def preferred_frequencies() -> List[float]:
    """Get the round ADC clock values worth aiming for.

    Whole MHz values up to 80 MHz are kept when they are a multiple of
    10 MHz or appear in the list of usual low frequencies.

    Returns:
        List[float]: The preferred frequencies in Hz, highest first
    """
    usual = {1, 2, 3, 4, 5, 6, 7, 8, 9, 12.5, 25, 37.5, 50, 60, 75}
    values = {
        f * 1_000_000.0 for f in range(1, 81) if f % 10 == 0 or f in usual
    }
    return sorted_frequencies(values)
