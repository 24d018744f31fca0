"""Core filter and PID controller components."""

from tustin_control.core.kernels import (
    FilterState,
    FilterStatus,
    FirstOrderKernel,
    SecondOrderKernel,
)
from tustin_control.core.shapes import (
    DEFAULT_DAMPING_RATIO,
    DEFAULT_NATURAL_FREQUENCY,
    FilterShape,
    SHAPE_CATALOG,
)
from tustin_control.core.filters import TustinFilter, make_filter
from tustin_control.core.filter_params import FilterParams
from tustin_control.core.pid_controller import PIDController, PIDState
from tustin_control.core.pid_params import (
    IntegratorType,
    PIDParams,
    PIDPresets,
    PIDType,
)

__all__ = [
    "FilterState",
    "FilterStatus",
    "FirstOrderKernel",
    "SecondOrderKernel",
    "DEFAULT_DAMPING_RATIO",
    "DEFAULT_NATURAL_FREQUENCY",
    "FilterShape",
    "SHAPE_CATALOG",
    "TustinFilter",
    "make_filter",
    "FilterParams",
    "PIDController",
    "PIDState",
    "IntegratorType",
    "PIDParams",
    "PIDPresets",
    "PIDType",
]
