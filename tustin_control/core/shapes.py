"""
Filter shape catalog.

Each shape maps physical parameters (gain, inverse time constant, natural
frequency and damping ratio) onto the continuous-time constants consumed by
one of the two Tustin kernels.

First-order shapes (continuous form):
    INTEGRATOR              c1 / s
    DERIVATOR               c1 * s
    FIRST_ORDER_LAG         c1 / (s + c1)          alias FIRST_ORDER_LOW_PASS
    WASHOUT                 s / (s + c1)           alias FIRST_ORDER_HIGH_PASS
    LEAD_LAG                (c1*s + c2) / (c3*s + c4)

Second-order shapes, (c1*s^2 + c2*s + c3) / (c4*s^2 + c5*s + c6):
    SECOND_ORDER            all six constants free
    SECOND_ORDER_ALIASING   1 / (c4*s^2 + c5*s + c6)
    SECOND_ORDER_LOW_PASS   wn^2 / (s^2 + 2*zeta*wn*s + wn^2)
    SECOND_ORDER_HIGH_PASS  s^2 / (s^2 + 2*zeta*wn*s + wn^2)
    BAND_PASS               2*zeta*wn*s / (s^2 + 2*zeta*wn*s + wn^2)
    BAND_STOP               (s^2 + wn^2) / (s^2 + 2*zeta*wn*s + wn^2)   alias NOTCH

The natural frequency wn is given in Hz and used as-is in the polynomials.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from tustin_control.core.kernels import (
    FirstOrderKernel,
    InitialOutput,
    Recurrence,
    SecondOrderKernel,
    snap_to_input,
    steady_state_gain,
)


DEFAULT_NATURAL_FREQUENCY = 80.0  # Hz
DEFAULT_DAMPING_RATIO = float(1.0 / np.sqrt(2.0))


class FilterShape(Enum):
    """Closed set of filter shapes."""
    INTEGRATOR = "integrator"
    DERIVATOR = "derivator"
    FIRST_ORDER_LAG = "first_order_lag"
    FIRST_ORDER_LOW_PASS = "first_order_lag"
    WASHOUT = "washout"
    FIRST_ORDER_HIGH_PASS = "washout"
    LEAD_LAG = "lead_lag"
    SECOND_ORDER = "second_order"
    SECOND_ORDER_ALIASING = "second_order_aliasing"
    SECOND_ORDER_LOW_PASS = "second_order_low_pass"
    SECOND_ORDER_HIGH_PASS = "second_order_high_pass"
    BAND_PASS = "band_pass"
    BAND_STOP = "band_stop"
    NOTCH = "band_stop"


# First-order recurrences: y = ca*x + cb*x_prev + cc*y_prev

def integrator(c: Sequence[float], dt: float) -> Tuple[float, float, float]:
    """Trapezoidal integration of c1 / s."""
    ca = dt * c[0] / 2.0
    return ca, ca, 1.0


def derivator(c: Sequence[float], dt: float) -> Tuple[float, float, float]:
    """Tustin derivative of c1 * s."""
    ca = 2.0 * c[0] / dt
    return ca, -ca, -1.0


def first_order_lag(c: Sequence[float], dt: float) -> Optional[Tuple[float, float, float]]:
    """Tustin equivalent of c1 / (s + c1)."""
    den = 2.0 + dt * c[0]
    if den == 0.0:
        return None
    ca = dt * c[0] / den
    cb = (2.0 - dt * c[0]) / den
    return ca, ca, cb


def washout(c: Sequence[float], dt: float) -> Optional[Tuple[float, float, float]]:
    """Tustin equivalent of s / (s + c1)."""
    den = 2.0 + dt * c[0]
    if den == 0.0:
        return None
    ca = 2.0 / den
    cb = (2.0 - dt * c[0]) / den
    return ca, -ca, cb


def lead_lag(c: Sequence[float], dt: float) -> Optional[Tuple[float, float, float]]:
    """Tustin equivalent of (c1*s + c2) / (c3*s + c4)."""
    c1, c2, c3, c4 = c
    den = 2.0 * c3 + dt * c4
    if den == 0.0:
        return None
    ca = (2.0 * c1 + dt * c2) / den
    cb = (dt * c2 - 2.0 * c1) / den
    cc = (2.0 * c3 - dt * c4) / den
    return ca, cb, cc


def lead_lag_gain(c: Sequence[float], value: float) -> float:
    """Lead-lag init rule: pre-warm to (c2/c4) * input."""
    c2, c4 = c[1], c[3]
    if c4 != 0.0:
        return (c2 / c4) * value
    return 0.0


# Second-order natural-frequency mappings: (wn, zeta) -> constants

def low_pass_constants(natural_frequency: float, damping_ratio: float) -> Dict[str, float]:
    wn2 = natural_frequency * natural_frequency
    return {"c5": 2.0 * damping_ratio * natural_frequency, "c3": wn2, "c6": wn2}


def high_pass_constants(natural_frequency: float, damping_ratio: float) -> Dict[str, float]:
    return {
        "c5": 2.0 * damping_ratio * natural_frequency,
        "c6": natural_frequency * natural_frequency,
    }


def band_pass_constants(natural_frequency: float, damping_ratio: float) -> Dict[str, float]:
    bandwidth = 2.0 * damping_ratio * natural_frequency
    return {"c2": bandwidth, "c5": bandwidth, "c6": natural_frequency * natural_frequency}


def band_stop_constants(natural_frequency: float, damping_ratio: float) -> Dict[str, float]:
    return low_pass_constants(natural_frequency, damping_ratio)


NaturalFrequencyMapping = Callable[[float, float], Dict[str, float]]


@dataclass(frozen=True)
class ShapeInfo:
    """Everything needed to build and drive a kernel for one shape."""
    order: int
    transfer_function: str
    recurrence: Optional[Recurrence] = None
    initial_output: Optional[InitialOutput] = None
    defaults: Dict[str, float] = field(default_factory=dict)
    fixed: Dict[str, float] = field(default_factory=dict)
    natural_frequency: Optional[NaturalFrequencyMapping] = None

    @property
    def has_natural_frequency(self) -> bool:
        return self.natural_frequency is not None

    def make_kernel(self):
        """Create a kernel loaded with this shape's default and fixed constants."""
        if self.order == 1:
            kernel = FirstOrderKernel(self.recurrence, self.initial_output or snap_to_input)
        else:
            kernel = SecondOrderKernel(self.initial_output or steady_state_gain)
        kernel.configure(**self.defaults)
        kernel.configure(**self.fixed)
        return kernel


SHAPE_CATALOG: Dict[FilterShape, ShapeInfo] = {
    FilterShape.INTEGRATOR: ShapeInfo(
        order=1, transfer_function="c1 / s", recurrence=integrator,
    ),
    FilterShape.DERIVATOR: ShapeInfo(
        order=1, transfer_function="c1 * s", recurrence=derivator,
    ),
    FilterShape.FIRST_ORDER_LAG: ShapeInfo(
        order=1, transfer_function="c1 / (s + c1)", recurrence=first_order_lag,
    ),
    FilterShape.WASHOUT: ShapeInfo(
        order=1, transfer_function="s / (s + c1)", recurrence=washout,
    ),
    FilterShape.LEAD_LAG: ShapeInfo(
        order=1,
        transfer_function="(c1*s + c2) / (c3*s + c4)",
        recurrence=lead_lag,
        initial_output=lead_lag_gain,
        defaults={"c2": 1.0, "c3": 1.0, "c4": 1.0},
    ),
    FilterShape.SECOND_ORDER: ShapeInfo(
        order=2, transfer_function="(c1*s^2 + c2*s + c3) / (c4*s^2 + c5*s + c6)",
    ),
    FilterShape.SECOND_ORDER_ALIASING: ShapeInfo(
        order=2,
        transfer_function="1 / (c4*s^2 + c5*s + c6)",
        fixed={"c1": 0.0, "c2": 0.0, "c3": 1.0},
    ),
    FilterShape.SECOND_ORDER_LOW_PASS: ShapeInfo(
        order=2,
        transfer_function="wn^2 / (s^2 + 2*zeta*wn*s + wn^2)",
        fixed={"c1": 0.0, "c2": 0.0, "c4": 1.0},
        natural_frequency=low_pass_constants,
    ),
    FilterShape.SECOND_ORDER_HIGH_PASS: ShapeInfo(
        order=2,
        transfer_function="s^2 / (s^2 + 2*zeta*wn*s + wn^2)",
        fixed={"c1": 1.0, "c4": 1.0, "c2": 0.0, "c3": 0.0},
        natural_frequency=high_pass_constants,
    ),
    FilterShape.BAND_PASS: ShapeInfo(
        order=2,
        transfer_function="2*zeta*wn*s / (s^2 + 2*zeta*wn*s + wn^2)",
        fixed={"c1": 0.0, "c3": 0.0, "c4": 1.0},
        natural_frequency=band_pass_constants,
    ),
    FilterShape.BAND_STOP: ShapeInfo(
        order=2,
        transfer_function="(s^2 + wn^2) / (s^2 + 2*zeta*wn*s + wn^2)",
        fixed={"c1": 1.0, "c4": 1.0, "c2": 0.0},
        natural_frequency=band_stop_constants,
    ),
}


def shape_info(shape: FilterShape) -> ShapeInfo:
    """Catalog entry for a shape (aliases resolve to their canonical member)."""
    return SHAPE_CATALOG[shape]
