#!/usr/bin/env python3
"""Exceptions raised by the ADC clock calculator."""

__all__ = ["AdcClockCalcError", "EmptyCandidateSetError"]


class AdcClockCalcError(Exception):
    """Generic exception class for the ADC clock calculator."""

    pass


class EmptyCandidateSetError(AdcClockCalcError):
    """No (clock frequency, sampling time) pair is available to rank."""

    pass
