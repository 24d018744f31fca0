"""Response and frequency-domain analysis components."""

from tustin_control.analysis.transfer import (
    FrequencyResponse,
    continuous_polynomials,
    dc_gain,
    discrete_coefficients,
    discrete_transfer_function,
    frequency_response,
    scipy_bilinear,
    transfer_function,
)
from tustin_control.analysis.response import (
    ResponseResult,
    run_filter,
    run_pid,
    step_signal,
)
from tustin_control.analysis.metrics import StepResponseMetrics, step_response_metrics
from tustin_control.analysis.plots import FilterPlotter

__all__ = [
    "FrequencyResponse",
    "continuous_polynomials",
    "dc_gain",
    "discrete_coefficients",
    "discrete_transfer_function",
    "frequency_response",
    "scipy_bilinear",
    "transfer_function",
    "ResponseResult",
    "run_filter",
    "run_pid",
    "step_signal",
    "StepResponseMetrics",
    "step_response_metrics",
    "FilterPlotter",
]
