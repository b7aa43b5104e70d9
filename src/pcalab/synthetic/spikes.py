"""
Synthetic spike trains and their electrode recordings.

Each neuron emits a characteristic waveform (its spike kernel) at random
event times. The voltage trace of a neuron is the superposition of its
kernel over all events plus Gaussian noise. Electrodes record fixed linear
mixtures of the neuron traces.
"""

from dataclasses import dataclass

import numpy as np

from .mixture import TOY_MIXING_MATRIX
from ..utils.data import check_nonnegative, check_positive, check_random_state


@dataclass(frozen=True)
class SpikeKernel:
    """Damped oscillation emitted by a neuron at each event.

    ``k(t) = (exp(-t / tau_slow) - exp(-t / tau_fast)) * sin(frequency * t)``
    for ``t >= 0`` and 0 for negative times.

    Attributes
    ----------
    tau_slow : float
        Slow decay time constant.
    tau_fast : float
        Fast decay time constant (rise of the envelope).
    frequency : float
        Angular frequency of the oscillation.
    """

    tau_slow: float
    tau_fast: float
    frequency: float

    def __post_init__(self):
        check_positive(tau_slow=self.tau_slow, tau_fast=self.tau_fast)
        check_nonnegative(frequency=self.frequency)

    def __call__(self, t):
        t = np.asarray(t, dtype=float)
        # clamp before exponentiating so negative times cannot overflow
        tp = np.maximum(t, 0.0)
        envelope = np.exp(-tp / self.tau_slow) - np.exp(-tp / self.tau_fast)
        return np.where(t < 0, 0.0, envelope * np.sin(self.frequency * tp))


NEURON1_KERNEL = SpikeKernel(tau_slow=0.2, tau_fast=0.01, frequency=10.0)
NEURON2_KERNEL = SpikeKernel(tau_slow=0.5, tau_fast=0.3, frequency=4.0)


def sample_times(horizon, step):
    """
    Regular sampling grid on [0, horizon].

    Parameters
    ----------
    horizon : float
        Last admissible time. Must be non-negative.
    step : float
        Sampling step. Must be positive.

    Returns
    -------
    ndarray
        ``floor(horizon / step) + 1`` times ``0, step, 2*step, ...``.
        The division is rounded so that e.g. 1000 / 0.02 gives 50001 samples.
    """
    check_nonnegative(horizon=horizon)
    check_positive(step=step)
    n_steps = int(np.floor(horizon / step + 1e-9))
    return np.arange(n_steps + 1) * step


def draw_event_times(seed=None, horizon=1000, rate_n=200, event_step=2):
    """
    Draw unique event times on an integer grid.

    ``rate_n`` candidates are drawn uniformly with replacement from
    ``0, event_step, 2*event_step, ... <= horizon``; duplicates collapse, so
    the number of returned events is random and at most ``rate_n``.

    Parameters
    ----------
    seed : int, RandomState or None, optional
        Seed or random state.
    horizon : float, default=1000
        Upper bound of the event grid.
    rate_n : int, default=200
        Number of candidate draws.
    event_step : int, default=2
        Spacing of the event grid.

    Returns
    -------
    ndarray
        Sorted unique event times.
    """
    check_nonnegative(horizon=horizon, rate_n=rate_n)
    check_positive(event_step=event_step)
    if not isinstance(rate_n, (int, np.integer)):
        raise TypeError(f"rate_n must be an integer, got {type(rate_n).__name__}")

    rs = check_random_state(seed)
    grid = np.arange(int(np.floor(horizon / event_step + 1e-9)) + 1) * event_step
    candidates = rs.choice(grid, size=rate_n, replace=True)
    return np.unique(candidates)


def generate_spike_train(
    kernel=NEURON1_KERNEL,
    seed=None,
    horizon=1000,
    step=0.02,
    rate_n=200,
    noise_std=1e-2,
    event_step=2,
    return_events=False,
):
    """
    Generate a noisy voltage trace by superposing a kernel at random events.

    Parameters
    ----------
    kernel : callable, default=NEURON1_KERNEL
        Vectorized waveform ``k(t)``, zero for ``t < 0``.
    seed : int, RandomState or None, optional
        Seed or random state. Events are drawn first, then the noise.
    horizon : float, default=1000
        Length of the recording.
    step : float, default=0.02
        Sampling step.
    rate_n : int, default=200
        Number of candidate event draws (see :func:`draw_event_times`).
    noise_std : float, default=1e-2
        Standard deviation of additive Gaussian noise per sample.
    event_step : int, default=2
        Spacing of the event grid.
    return_events : bool, default=False
        Whether to also return the unique event times.

    Returns
    -------
    trace : ndarray of shape (floor(horizon / step) + 1,)
        ``sum_e k(t - e) + noise`` on the sampling grid.
    events : ndarray
        Only if ``return_events`` is True.

    Raises
    ------
    ValueError
        If horizon, rate_n or noise_std is negative, or step is not positive.

    Examples
    --------
    >>> trace = generate_spike_train(seed=0)
    >>> trace.shape
    (50001,)
    """
    check_nonnegative(noise_std=noise_std)
    times = sample_times(horizon, step)

    rs = check_random_state(seed)
    events = draw_event_times(rs, horizon=horizon, rate_n=rate_n, event_step=event_step)

    trace = np.zeros(len(times))
    for e in events:
        # kernel vanishes before the event, only the tail needs evaluating
        start = np.searchsorted(times, e)
        trace[start:] += kernel(times[start:] - e)

    trace += rs.normal(0.0, noise_std, len(times))

    if return_events:
        return trace, events
    return trace


def generate_electrode_signals(
    seed=None,
    mixing_matrix=TOY_MIXING_MATRIX,
    kernels=(NEURON1_KERNEL, NEURON2_KERNEL),
    horizon=1000,
    step=0.02,
    rate_n=200,
    noise_std=1e-2,
    event_step=2,
):
    """
    Simulate neurons and the electrodes that record their mixture.

    One trace is generated per kernel, in kernel order, from a single random
    stream. The traces are then stacked in reverse order (``[v2, v1]`` for
    two neurons) and mixed: ``electrodes = traces @ mixing_matrix``.

    Parameters
    ----------
    seed : int, RandomState or None, optional
        Seed or random state.
    mixing_matrix : array-like of shape (n_neurons, n_electrodes)
        Mixing coefficients. Defaults to the toy 2 x 3 projection.
    kernels : sequence of callables
        One spike kernel per neuron.
    horizon, step, rate_n, noise_std, event_step
        Passed to :func:`generate_spike_train`.

    Returns
    -------
    traces : ndarray of shape (n_samples, n_neurons)
        Neuron traces, columns in reverse kernel order.
    electrodes : ndarray of shape (n_samples, n_electrodes)
        Exact linear image of ``traces``. No noise is added in mixing.

    Raises
    ------
    ValueError
        If the number of kernels differs from the number of mixing rows.
    """
    mixing_matrix = np.asarray(mixing_matrix, dtype=float)
    if mixing_matrix.ndim != 2 or mixing_matrix.shape[0] != len(kernels):
        raise ValueError(
            f"mixing_matrix must have one row per kernel ({len(kernels)}), "
            f"got shape {mixing_matrix.shape}"
        )

    rs = check_random_state(seed)
    traces = [
        generate_spike_train(
            kernel,
            rs,
            horizon=horizon,
            step=step,
            rate_n=rate_n,
            noise_std=noise_std,
            event_step=event_step,
        )
        for kernel in kernels
    ]
    traces = np.column_stack(traces[::-1])

    return traces, traces @ mixing_matrix
