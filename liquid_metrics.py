"""
Error metrics for benchmark predictions.

All functions accept array-likes of matching shape (1-D series are treated
as a single output column) and return plain floats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

import numpy as np


@dataclass
class BenchmarkResults:
    """Metrics for one model on one dataset."""

    model_name: str = ""
    dataset_name: str = ""
    mean_squared_error: float = 0.0
    root_mean_squared_error: float = 0.0
    mean_absolute_error: float = 0.0
    normalized_root_mean_squared_error: float = 0.0
    r2_score: float = 0.0
    training_time: float = 0.0
    inference_time: float = 0.0
    memory_usage: float = 0.0
    network_size: int = 0
    additional_metrics: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _pair(predictions: Any, targets: Any) -> tuple:
    p = np.asarray(predictions, dtype=float)
    t = np.asarray(targets, dtype=float)
    if p.ndim == 1:
        p = p[:, None]
    if t.ndim == 1:
        t = t[:, None]
    if p.shape != t.shape:
        raise ValueError(
            f"Predictions and targets must have the same dimensions: {p.shape} vs {t.shape}"
        )
    if p.size == 0:
        raise ValueError("Predictions and targets must not be empty")
    return p, t


def calculate_mse(predictions: Any, targets: Any) -> float:
    p, t = _pair(predictions, targets)
    return float(np.mean((p - t) ** 2))


def calculate_rmse(predictions: Any, targets: Any) -> float:
    return math.sqrt(calculate_mse(predictions, targets))


def calculate_mae(predictions: Any, targets: Any) -> float:
    p, t = _pair(predictions, targets)
    return float(np.mean(np.abs(p - t)))


def calculate_nrmse(predictions: Any, targets: Any) -> float:
    """RMSE normalized by the target range; NaN for constant targets."""
    _, t = _pair(predictions, targets)
    spread = float(np.max(t) - np.min(t))
    if spread <= 0.0:
        return math.nan
    return calculate_rmse(predictions, targets) / spread


def calculate_r2_score(predictions: Any, targets: Any) -> float:
    """Coefficient of determination; NaN for constant targets."""
    p, t = _pair(predictions, targets)
    total = float(np.sum((t - np.mean(t)) ** 2))
    if total <= 0.0:
        return math.nan
    residual = float(np.sum((t - p) ** 2))
    return 1.0 - residual / total


def calculate_prediction_horizon_accuracy(
    predictions: Any,
    targets: Any,
    max_horizon: int = 10,
) -> Dict[int, float]:
    """Mean absolute error over samples from index ``horizon - 1`` onward."""
    p, t = _pair(predictions, targets)
    errors = np.abs(p - t)
    return {
        horizon: float(np.mean(errors[horizon - 1:]))
        for horizon in range(1, min(max_horizon, len(p)) + 1)
    }


def calculate_comprehensive_metrics(
    model_name: str,
    dataset_name: str,
    predictions: Any,
    targets: Any,
    training_time: float = 0.0,
    inference_time: float = 0.0,
    memory_usage: float = 0.0,
    network_size: int = 0,
) -> BenchmarkResults:
    mse = calculate_mse(predictions, targets)
    return BenchmarkResults(
        model_name=model_name,
        dataset_name=dataset_name,
        mean_squared_error=mse,
        root_mean_squared_error=math.sqrt(mse),
        mean_absolute_error=calculate_mae(predictions, targets),
        normalized_root_mean_squared_error=calculate_nrmse(predictions, targets),
        r2_score=calculate_r2_score(predictions, targets),
        training_time=training_time,
        inference_time=inference_time,
        memory_usage=memory_usage,
        network_size=network_size,
    )
