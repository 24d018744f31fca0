"""
Tustin Control Library
======================

Discrete-time control building blocks:
- Tustin (bilinear) filters: integrator, derivator, lag, washout, lead-lag,
  second-order low/high/band-pass and notch
- PID controller with selectable form and integration scheme
- Frequency/step-response analysis against python-control and scipy
"""

from tustin_control.core.filters import TustinFilter, make_filter
from tustin_control.core.filter_params import FilterParams
from tustin_control.core.shapes import FilterShape
from tustin_control.core.pid_controller import PIDController
from tustin_control.core.pid_params import PIDParams, PIDType, IntegratorType

__version__ = "1.0.0"
__all__ = [
    "TustinFilter",
    "make_filter",
    "FilterParams",
    "FilterShape",
    "PIDController",
    "PIDParams",
    "PIDType",
    "IntegratorType",
]
