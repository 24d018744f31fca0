"""
Step response metrics for filter outputs.
Uses numpy for vectorized calculations.
"""

from typing import Dict
from dataclasses import dataclass, asdict
import numpy as np


@dataclass
class StepResponseMetrics:
    """Metrics from step response analysis."""
    rise_time: float
    settling_time: float
    overshoot_percent: float
    peak_time: float
    peak_value: float
    final_value: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _settling_time(
    timestamps: np.ndarray,
    outputs: np.ndarray,
    final_value: float,
    tolerance: float
) -> float:
    """Time after which the output stays within the tolerance band."""
    band = tolerance * abs(final_value) if abs(final_value) > 1e-10 else tolerance
    outside = np.where(np.abs(outputs - final_value) > band)[0]
    if len(outside) == 0:
        return float(timestamps[0])
    return float(timestamps[min(outside[-1] + 1, len(timestamps) - 1)])


def step_response_metrics(
    timestamps: np.ndarray,
    target: float,
    outputs: np.ndarray,
    initial_value: float = 0.0,
    tolerance: float = 0.02
) -> StepResponseMetrics:
    """
    Calculate step response metrics.

    Args:
        timestamps: Sample times
        target: Final value the response should reach
        outputs: Response samples
        initial_value: Output before the step
        tolerance: Settling band as a fraction of the target

    Raises:
        ValueError: With fewer than two samples or a zero-height step
    """
    timestamps = np.asarray(timestamps, dtype=float)
    outputs = np.asarray(outputs, dtype=float)
    if len(timestamps) < 2:
        raise ValueError("Need at least 2 data points")

    delta = target - initial_value
    if abs(delta) < 1e-10:
        raise ValueError("Step height must be non-zero")

    y_norm = (outputs - initial_value) / delta

    above_10 = np.where(y_norm >= 0.1)[0]
    above_90 = np.where(y_norm >= 0.9)[0]
    t_10 = timestamps[above_10[0]] if len(above_10) else timestamps[0]
    t_90 = timestamps[above_90[0]] if len(above_90) else timestamps[-1]
    rise_time = max(0.0, float(t_90 - t_10))

    peak_idx = int(np.argmax(y_norm))
    overshoot = max(0.0, (y_norm[peak_idx] - 1.0) * 100.0)

    return StepResponseMetrics(
        rise_time=rise_time,
        settling_time=_settling_time(timestamps, outputs, target, tolerance),
        overshoot_percent=float(overshoot),
        peak_time=float(timestamps[peak_idx]),
        peak_value=float(outputs[peak_idx]),
        final_value=float(outputs[-1]),
    )
