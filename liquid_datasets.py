"""
Benchmark datasets for liquid network evaluation.

Closed-form and chaotic time series used in the LNN literature, sliced into
fixed-length input windows with next-value targets:

    - Mackey-Glass delay differential equation (chaotic, 1-D)
    - Noisy sine wave (continuous learning, 1-D)
    - Lorenz attractor (chaotic dynamical system, 3-D)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np


@dataclass
class BenchmarkDataset:
    """A windowed time-series prediction task.

    Attributes:
        name: Short display name.
        description: One-line description of the task.
        inputs: Array of shape (samples, sequence_length * input_dimension).
        targets: Array of shape (samples, output_dimension).
        sequence_length: Window length in time steps.
        input_dimension: Features per time step.
        output_dimension: Values predicted per sample.
        source: Literature reference.
        series: The raw generated series the windows were cut from.
    """

    name: str = ""
    description: str = ""
    inputs: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    targets: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    sequence_length: int = 0
    input_dimension: int = 0
    output_dimension: int = 0
    source: str = ""
    series: np.ndarray = field(default_factory=lambda: np.zeros(0))

    @property
    def samples(self) -> int:
        return int(self.inputs.shape[0])


def _windows(data: np.ndarray, sequence_length: int) -> tuple:
    """Slice ``data`` (length × dim) into flattened windows and next-step targets."""
    if data.ndim == 1:
        data = data[:, None]
    samples = len(data) - sequence_length - 1
    if samples <= 0:
        raise ValueError(
            f"series of length {len(data)} is too short for windows of {sequence_length}"
        )
    dim = data.shape[1]
    inputs = np.empty((samples, sequence_length * dim))
    for i in range(samples):
        inputs[i] = data[i:i + sequence_length].reshape(-1)
    targets = data[sequence_length:sequence_length + samples].copy()
    return inputs, targets


def mackey_glass_series(length: int = 1000, tau: float = 17.0, dt: float = 0.1) -> np.ndarray:
    """Euler-integrated Mackey-Glass series starting from x=1.2.

    The delayed term reads 0.1 until ``tau / dt`` samples of history exist.
    """
    lag = int(tau / dt)
    data = np.empty(length)
    x = 1.2
    for i in range(length):
        delayed = 0.1 if i < lag else data[i - lag]
        dx = (0.2 * delayed) / (1.0 + delayed ** 10) - 0.1 * x
        x += dt * dx
        data[i] = x
    return data


def generate_mackey_glass(length: int = 1000, tau: float = 17.0) -> BenchmarkDataset:
    """Mackey-Glass sequence prediction with windows of 20."""
    series = mackey_glass_series(length, tau)
    sequence_length = 20
    inputs, targets = _windows(series, sequence_length)
    return BenchmarkDataset(
        name="Mackey-Glass",
        description="Chaotic time series prediction using Mackey-Glass equation",
        inputs=inputs,
        targets=targets,
        sequence_length=sequence_length,
        input_dimension=1,
        output_dimension=1,
        source="Mackey, M. C. & Glass, L. (1977). Oscillation and chaos in physiological control systems",
        series=series,
    )


def generate_sine_wave(
    length: int = 1000,
    frequency: float = 0.1,
    amplitude: float = 1.0,
    noise: float = 0.1,
    seed: int = 42,
) -> BenchmarkDataset:
    """Noisy sine wave prediction with windows of 10 (fixed seed)."""
    rng = np.random.default_rng(seed)
    t = np.arange(length) * 0.1
    series = amplitude * np.sin(2 * np.pi * frequency * t) + noise * (rng.random(length) - 0.5)
    sequence_length = 10
    inputs, targets = _windows(series, sequence_length)
    return BenchmarkDataset(
        name="Sine Wave",
        description="Noisy sine wave prediction for continuous learning evaluation",
        inputs=inputs,
        targets=targets,
        sequence_length=sequence_length,
        input_dimension=1,
        output_dimension=1,
        source="Synthetic",
        series=series,
    )


def generate_lorenz_attractor(
    length: int = 2000,
    sigma: float = 10.0,
    rho: float = 28.0,
    beta: float = 8.0 / 3.0,
) -> BenchmarkDataset:
    """Lorenz system (x, y, z) with windows of 15 flattened xyz triples."""
    dt = 0.01
    series = np.empty((length, 3))
    x = y = z = 1.0
    for i in range(length):
        dx = sigma * (y - x)
        dy = x * (rho - z) - y
        dz = x * y - beta * z
        x += dt * dx
        y += dt * dy
        z += dt * dz
        series[i] = (x, y, z)

    sequence_length = 15
    inputs, targets = _windows(series, sequence_length)
    return BenchmarkDataset(
        name="Lorenz Attractor",
        description="Chaotic dynamical system modeling using Lorenz equations",
        inputs=inputs,
        targets=targets,
        sequence_length=sequence_length,
        input_dimension=3,
        output_dimension=3,
        source="Lorenz, E. N. (1963). Deterministic nonperiodic flow",
        series=series,
    )


def get_all_datasets(length: int = 1000) -> Iterator[BenchmarkDataset]:
    """Yield the standard corpus; Lorenz gets twice ``length`` samples."""
    yield generate_mackey_glass(length)
    yield generate_sine_wave(length)
    yield generate_lorenz_attractor(2 * length)
