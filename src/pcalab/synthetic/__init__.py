"""
Synthetic data generation for PCA experiments.

This module provides generators with a known ground truth: linear mixtures
of hidden signals, spike trains recorded through mixing electrodes, and the
small datasets used by the denoising, clustering and regression examples.
"""

# Linear generative models
from .mixture import (
    TOY_MIXING_MATRIX,
    TOY_SCALES,
    ROTATED_SCALES,
    generate_mixture,
    rotation_x,
    rotation_y,
    build_rotation_mixing,
    generate_rotated_mixture,
    normalize_rows,
)

# Spike trains
from .spikes import (
    SpikeKernel,
    NEURON1_KERNEL,
    NEURON2_KERNEL,
    sample_times,
    draw_event_times,
    generate_spike_train,
    generate_electrode_signals,
)

# Example datasets
from .datasets import (
    CLOUD_CENTERS,
    waveform_time_grid,
    clean_waveforms,
    generate_noisy_waveforms,
    generate_eight_clouds,
    generate_pcr_data,
)

__all__ = [
    # Linear mixtures
    "TOY_MIXING_MATRIX",
    "TOY_SCALES",
    "ROTATED_SCALES",
    "generate_mixture",
    "rotation_x",
    "rotation_y",
    "build_rotation_mixing",
    "generate_rotated_mixture",
    "normalize_rows",
    # Spike trains
    "SpikeKernel",
    "NEURON1_KERNEL",
    "NEURON2_KERNEL",
    "sample_times",
    "draw_event_times",
    "generate_spike_train",
    "generate_electrode_signals",
    # Datasets
    "CLOUD_CENTERS",
    "waveform_time_grid",
    "clean_waveforms",
    "generate_noisy_waveforms",
    "generate_eight_clouds",
    "generate_pcr_data",
]
