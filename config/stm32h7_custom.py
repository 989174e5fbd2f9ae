"""Configuration file for a restricted STM32H7 sampling time menu."""

sampling_times = [2.5, 8.5, 16.5, 32.5]

overhead_cycles = 10.0  # ADC cycles

target_sample_rate = 200_000  # Hz
max_results = 5

policy = "prefer-high-clock"
