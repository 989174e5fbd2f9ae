#!/usr/bin/env python3
"""ADC clock calculator module."""

__all__ = [
    "ADCConfig",
    "AdcClockCalcError",
    "ClockTree",
    "ConfigOptimizer",
    "EmptyCandidateSetError",
    "OptimizationPolicy",
    "OutputPath",
    "SamplingTimeMenu",
    "default_optimizer",
    "enumerate_clock_frequencies",
    "find_multiple_settings",
    "find_optimal_settings",
    "load_config",
    "menu_from_config",
    "preferred_frequencies",
    "sorted_frequencies",
]

from .clock_tree import (
    ClockTree,
    OutputPath,
    enumerate_clock_frequencies,
    preferred_frequencies,
    sorted_frequencies,
)
from .errors import AdcClockCalcError, EmptyCandidateSetError
from .optimizer import (
    ADCConfig,
    ConfigOptimizer,
    OptimizationPolicy,
    SamplingTimeMenu,
    default_optimizer,
    find_multiple_settings,
    find_optimal_settings,
)
from .utils import load_config, menu_from_config
