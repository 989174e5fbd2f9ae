from adc_clock_calc import (
    ClockTree,
    OutputPath,
    enumerate_clock_frequencies,
    preferred_frequencies,
    sorted_frequencies,
)
from adc_clock_calc.clock_tree import (
    ADC_KERNEL_MAX_FREQUENCY,
    ADC_KERNEL_MIN_FREQUENCY,
    ADC_SCLK_PRESCALERS,
)


def _single_path_tree(**kwargs):
    args = dict(
        oscillators=(8_000_000.0,),
        multipliers=(40,),
        input_dividers=(1,),
        output_paths=(OutputPath("PLL2_P", (2,), 160_000_000.0),),
        prescalers=(1, 2),
        band=(1_000_000.0, 1_000_000_000.0),
    )
    args.update(kwargs)
    return ClockTree(**args)


def test_enumeration_is_deterministic():
    assert ClockTree().enumerate() == ClockTree().enumerate()
    assert enumerate_clock_frequencies() == ClockTree().enumerate()


def test_enumeration_is_memoized():
    assert enumerate_clock_frequencies() is enumerate_clock_frequencies()


def test_frequencies_within_band():
    frequencies = enumerate_clock_frequencies()
    assert frequencies
    for f in frequencies:
        assert ADC_KERNEL_MIN_FREQUENCY <= f <= ADC_KERNEL_MAX_FREQUENCY


def test_band_ceiling_is_reachable():
    # 16 MHz * 50 / 1 / 10 = 80 MHz, prescaler 1
    frequencies = enumerate_clock_frequencies()
    assert 80_000_000.0 in frequencies
    assert max(frequencies) == 80_000_000.0


def test_materialized_frequencies_are_unique_and_descending():
    frequencies = sorted_frequencies(enumerate_clock_frequencies())
    assert len(frequencies) == len(set(frequencies))
    assert all(a > b for a, b in zip(frequencies, frequencies[1:]))


def test_mux_doubling_and_halving():
    # 320 MHz VCO / 2 = 160 MHz, at the ceiling, then / 1 and / 2
    assert _single_path_tree().enumerate() == {160_000_000.0, 80_000_000.0}


def test_output_ceiling_discards_path():
    # 400 MHz VCO / 2 = 200 MHz, above the ceiling
    assert _single_path_tree(multipliers=(50,)).enumerate() == frozenset()


def test_paths_share_downstream_computation():
    tree = _single_path_tree(
        output_paths=(
            OutputPath("PLL2_P", (2,), 160_000_000.0),
            OutputPath("PLL3_R", (4,), 160_000_000.0),
        ),
    )
    # PLL3_R / 4 = 80 MHz lands on PLL2_P / 2 / 2 and 40 MHz is new
    assert tree.enumerate() == {160_000_000.0, 80_000_000.0, 40_000_000.0}


def test_inconsistent_tables_give_empty_set():
    assert _single_path_tree(output_paths=()).enumerate() == frozenset()
    assert _single_path_tree(oscillators=()).enumerate() == frozenset()
    assert (
        _single_path_tree(band=(500_000_000.0, 600_000_000.0)).enumerate()
        == frozenset()
    )


def test_preferred_frequencies():
    frequencies = preferred_frequencies()
    assert len(frequencies) == 19
    assert frequencies[0] == 80_000_000.0
    assert frequencies[-1] == 1_000_000.0
    assert 25_000_000.0 in frequencies
    assert 75_000_000.0 in frequencies
    # Only whole MHz values are swept
    assert 12_500_000.0 not in frequencies
    assert 37_500_000.0 not in frequencies
    assert 11_000_000.0 not in frequencies


def test_sclk_prescalers():
    assert ADC_SCLK_PRESCALERS == (1, 2, 4)
