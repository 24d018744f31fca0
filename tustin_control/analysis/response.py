"""
Run filters and controllers over sampled signals.
Results are numpy arrays ready for metrics and plotting.
"""

from typing import Dict, Optional, Sequence, Union
from dataclasses import dataclass
import numpy as np

from tustin_control.core.filters import TustinFilter
from tustin_control.core.pid_controller import PIDController


@dataclass
class ResponseResult:
    """Container for a sampled response."""
    timestamps: np.ndarray
    inputs: np.ndarray
    outputs: np.ndarray
    label: str = ""

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {
            'timestamp': self.timestamps,
            'input': self.inputs,
            'output': self.outputs,
        }


def step_signal(num_samples: int, amplitude: float = 1.0, delay: int = 0) -> np.ndarray:
    """Step of the given amplitude starting at sample index `delay`."""
    values = np.zeros(num_samples)
    values[delay:] = amplitude
    return values


def run_filter(
    filt: TustinFilter,
    inputs: Union[Sequence[float], np.ndarray],
    dt: float,
    reset: bool = True,
    initial: Optional[float] = None
) -> ResponseResult:
    """
    Feed a sampled signal through a filter.

    Args:
        filt: Filter to drive
        inputs: Input samples
        dt: Time step in seconds
        reset: Reset the filter before running
        initial: If given, initialize the filter at this input first
            (otherwise it auto-initializes on the first sample)

    Returns:
        ResponseResult with one output per input sample
    """
    inputs = np.asarray(inputs, dtype=float)
    if reset:
        filt.reset()
    if initial is not None:
        filt.init(initial)

    outputs = np.empty_like(inputs)
    for k, value in enumerate(inputs):
        outputs[k] = filt.step(float(value), dt)

    return ResponseResult(
        timestamps=np.arange(1, len(inputs) + 1) * dt,
        inputs=inputs,
        outputs=outputs,
        label=filt.shape.name,
    )


def run_pid(
    controller: PIDController,
    errors: Union[Sequence[float], np.ndarray],
    dt: float,
    stop: Optional[Union[Sequence[bool], np.ndarray]] = None,
    reset: bool = True
) -> ResponseResult:
    """
    Feed an error sequence through a PID controller (open loop).

    Args:
        controller: Controller to drive
        errors: Error samples
        dt: Time step in seconds
        stop: Optional per-sample anti-windup flags
        reset: Reset the controller before running
    """
    errors = np.asarray(errors, dtype=float)
    stops = np.zeros(len(errors), dtype=bool) if stop is None else np.asarray(stop, dtype=bool)
    if len(stops) != len(errors):
        raise ValueError("stop flags must match the number of error samples")
    if reset:
        controller.reset()

    outputs = np.empty_like(errors)
    for k, (error, halt) in enumerate(zip(errors, stops)):
        outputs[k] = controller.step(float(error), dt, stop=bool(halt))

    return ResponseResult(
        timestamps=np.arange(1, len(errors) + 1) * dt,
        inputs=errors,
        outputs=outputs,
        label=controller.pid_type.name,
    )
