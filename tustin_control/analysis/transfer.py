"""
Transfer-function views of Tustin filters using python-control and scipy.

The continuous model comes from the shape's continuous form; the discrete
model is read back from the coefficients the kernel actually runs, so the two
can be compared with scipy.signal.bilinear or in the frequency domain.
"""

from typing import Tuple
from dataclasses import dataclass
import numpy as np
import control as ct
from scipy import signal

from tustin_control.core.filters import TustinFilter
from tustin_control.core.shapes import FilterShape


def continuous_polynomials(filt: TustinFilter) -> Tuple[np.ndarray, np.ndarray]:
    """Numerator and denominator of the continuous form, highest power first."""
    c = filt.coefficients
    shape = filt.shape
    if shape is FilterShape.INTEGRATOR:
        return np.array([c['c1']]), np.array([1.0, 0.0])
    if shape is FilterShape.DERIVATOR:
        return np.array([c['c1'], 0.0]), np.array([1.0])
    if shape is FilterShape.FIRST_ORDER_LAG:
        return np.array([c['c1']]), np.array([1.0, c['c1']])
    if shape is FilterShape.WASHOUT:
        return np.array([1.0, 0.0]), np.array([1.0, c['c1']])
    if shape is FilterShape.LEAD_LAG:
        return np.array([c['c1'], c['c2']]), np.array([c['c3'], c['c4']])
    return (
        np.array([c['c1'], c['c2'], c['c3']]),
        np.array([c['c4'], c['c5'], c['c6']]),
    )


def transfer_function(filt: TustinFilter) -> ct.TransferFunction:
    """Continuous-time transfer function of a filter's current constants."""
    num, den = continuous_polynomials(filt)
    return ct.TransferFunction(num, den)


def discrete_coefficients(filt: TustinFilter, dt: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    (b, a) of the recurrence the kernel runs at this time step, with a[0] = 1.

    Raises:
        ValueError: If the recurrence denominator is zero at this dt
    """
    discrete = filt.kernel.discrete_coefficients(dt)
    if discrete is None:
        raise ValueError(f"{filt.shape.name} is degenerate at dt={dt}")
    if filt.order == 1:
        ca, cb, cc = discrete
        return np.array([ca, cb]), np.array([1.0, -cc])
    ca, cb, cc, cd, ce = discrete
    return np.array([ca, cb, cc]), np.array([1.0, cd, ce])


def scipy_bilinear(filt: TustinFilter, dt: float) -> Tuple[np.ndarray, np.ndarray]:
    """Tustin discretization of the continuous form computed by scipy."""
    num, den = continuous_polynomials(filt)
    return signal.bilinear(num, den, fs=1.0 / dt)


def discrete_transfer_function(filt: TustinFilter, dt: float) -> ct.TransferFunction:
    """Discrete-time transfer function in z with sample time dt."""
    b, a = discrete_coefficients(filt, dt)
    return ct.TransferFunction(b, a, dt)


@dataclass
class FrequencyResponse:
    """Continuous vs discrete frequency response of a filter."""
    omega: np.ndarray  # rad/s
    continuous_db: np.ndarray
    continuous_phase_deg: np.ndarray
    discrete_db: np.ndarray
    discrete_phase_deg: np.ndarray

    @property
    def nyquist(self) -> float:
        return float(self.omega[-1])


def frequency_response(
    filt: TustinFilter,
    dt: float,
    omega_min: float = 1e-2,
    num_points: int = 500
) -> FrequencyResponse:
    """
    Evaluate both models on a log grid up to just below the Nyquist frequency.

    Args:
        filt: Filter to analyze
        dt: Sample time in seconds
        omega_min: Lowest frequency in rad/s
        num_points: Number of grid points
    """
    nyquist = np.pi / dt
    omega = np.logspace(np.log10(omega_min), np.log10(0.999 * nyquist), num_points)

    num, den = continuous_polynomials(filt)
    h_cont = np.polyval(num, 1j * omega) / np.polyval(den, 1j * omega)

    b, a = discrete_coefficients(filt, dt)
    _, h_disc = signal.freqz(b, a, worN=omega * dt)

    with np.errstate(divide='ignore'):
        return FrequencyResponse(
            omega=omega,
            continuous_db=20 * np.log10(np.abs(h_cont)),
            continuous_phase_deg=np.angle(h_cont, deg=True),
            discrete_db=20 * np.log10(np.abs(h_disc)),
            discrete_phase_deg=np.angle(h_disc, deg=True),
        )


def dc_gain(filt: TustinFilter) -> float:
    """DC gain of the continuous form (inf for an integrator)."""
    return float(np.real(ct.dcgain(transfer_function(filt))))
