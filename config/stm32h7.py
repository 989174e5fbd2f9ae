"""Configuration file for the STM32H7 ADC clock search."""

# Sampling times selectable in ADC_SMPRx, in ADC cycles
sampling_times = [1.5, 2.5, 8.5, 16.5, 32.5, 64.5, 387.5, 810.5]

# Conversion overhead (Tsar), in ADC cycles
overhead_cycles = 8.5

target_sample_rate = 200_000  # Hz
max_results = 3

policy = "balanced"
