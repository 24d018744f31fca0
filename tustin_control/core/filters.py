"""
Tustin filters: a shape from the catalog driving one kernel.

Example:
    >>> lpf = TustinFilter(FilterShape.SECOND_ORDER_LOW_PASS, natural_frequency=20.0)
    >>> for sample in samples:
    ...     y = lpf.step(sample, dt=0.001)
"""

from typing import Any, Dict, Optional, Union

from tustin_control.core.kernels import FilterState, FilterStatus
from tustin_control.core.shapes import (
    DEFAULT_DAMPING_RATIO,
    DEFAULT_NATURAL_FREQUENCY,
    FilterShape,
    shape_info,
)
from tustin_control.logging.csv_logger import CSVLogger
from tustin_control.utils.validators import validate_enum, validate_real


class TustinFilter:
    """
    Discrete-time filter built from a continuous-time shape.

    The shape's fixed constants are re-applied before every step, so only the
    free constants (and the natural frequency, where the shape has one) are
    tunable.
    """

    def __init__(
        self,
        shape: Union[FilterShape, str] = FilterShape.FIRST_ORDER_LAG,
        natural_frequency: Optional[float] = None,
        damping_ratio: Optional[float] = None,
        csv_path: Optional[str] = None,
        **coefficients: float
    ):
        """
        Initialize filter.

        Args:
            shape: Filter shape (member, value or name)
            natural_frequency: Natural frequency in Hz (second-order shapes
                with a mapping; defaults to 80 Hz)
            damping_ratio: Damping ratio (defaults to 1/sqrt(2))
            csv_path: Path for a per-step CSV trace (no logging if None)
            **coefficients: Continuous-time constants c1..c4 or c1..c6
        """
        self._shape = validate_enum(shape, "shape", FilterShape)
        self._info = shape_info(self._shape)
        self._kernel = self._info.make_kernel()

        self._natural_frequency: Optional[float] = None
        self._damping_ratio: Optional[float] = None

        # Mapping first, then explicit constants, then the fixed ones
        if self._info.has_natural_frequency:
            self.set_natural_frequency(
                DEFAULT_NATURAL_FREQUENCY if natural_frequency is None else natural_frequency,
                DEFAULT_DAMPING_RATIO if damping_ratio is None else damping_ratio,
            )
        self._kernel.configure(**coefficients)
        self._apply_fixed_constants()

        self._iteration = 0
        self._logger: Optional[CSVLogger] = None
        if csv_path is not None:
            self._logger = CSVLogger(
                csv_path,
                columns=['iteration', 'dt', 'input', 'output', 'skipped'],
            )

    # -- configuration ------------------------------------------------------

    @property
    def shape(self) -> FilterShape:
        return self._shape

    @property
    def order(self) -> int:
        return self._info.order

    @property
    def kernel(self):
        return self._kernel

    @property
    def coefficients(self) -> Dict[str, float]:
        return self._kernel.coefficients

    @property
    def natural_frequency(self) -> Optional[float]:
        """Natural frequency in Hz, or None for shapes without one."""
        return self._natural_frequency

    @property
    def damping_ratio(self) -> Optional[float]:
        return self._damping_ratio

    def configure(
        self,
        natural_frequency: Optional[float] = None,
        damping_ratio: Optional[float] = None,
        **coefficients: float
    ) -> None:
        """
        Update tunable constants between steps.

        Args:
            natural_frequency: New natural frequency in Hz
            damping_ratio: New damping ratio (keeps the current one if None)
            **coefficients: Continuous-time constants to overwrite
        """
        if natural_frequency is not None or damping_ratio is not None:
            self.set_natural_frequency(
                self._natural_frequency if natural_frequency is None else natural_frequency,
                self._damping_ratio if damping_ratio is None else damping_ratio,
            )
        self._kernel.configure(**coefficients)
        self._apply_fixed_constants()

    def set_natural_frequency(
        self,
        natural_frequency: float,
        damping_ratio: float = DEFAULT_DAMPING_RATIO
    ) -> None:
        """
        Derive the constants from a natural frequency (Hz) and damping ratio.

        Shapes without a natural-frequency mapping ignore the call.
        """
        mapping = self._info.natural_frequency
        if mapping is None:
            return
        natural_frequency = validate_real(natural_frequency, "natural_frequency")
        damping_ratio = validate_real(damping_ratio, "damping_ratio")
        self._kernel.configure(**mapping(natural_frequency, damping_ratio))
        self._natural_frequency = natural_frequency
        self._damping_ratio = damping_ratio

    def _apply_fixed_constants(self) -> None:
        if self._info.fixed:
            self._kernel.configure(**self._info.fixed)

    # -- state machine ------------------------------------------------------

    @property
    def status(self) -> FilterStatus:
        return self._kernel.status

    @property
    def initialized(self) -> bool:
        return self._kernel.initialized

    @property
    def input(self) -> float:
        return self._kernel.input

    @property
    def output(self) -> float:
        return self._kernel.output

    @property
    def state(self) -> FilterState:
        return self._kernel.state

    def set(self, target: float) -> None:
        """Store the input (target) without computing anything."""
        self._kernel.set(target)

    def get(self) -> float:
        """Last computed output."""
        return self._kernel.get()

    def init(self, target: Optional[float] = None) -> None:
        """Start without a transient, optionally at a given input."""
        self._kernel.init(target)

    def reset(self) -> None:
        """Clear transient state; constants are kept."""
        self._kernel.reset()
        self._iteration = 0

    def step(
        self,
        target: float,
        dt: float,
        natural_frequency: Optional[float] = None,
        damping_ratio: Optional[float] = None,
        **coefficients: float
    ) -> float:
        """
        Advance one time step.

        Args:
            target: New input value
            dt: Time step in seconds (must be > 0, not checked)
            natural_frequency: Optional new natural frequency in Hz; the
                damping ratio falls back to 1/sqrt(2) when not given
            damping_ratio: Optional new damping ratio
            **coefficients: Optional constants to apply before stepping

        Returns:
            Filter output
        """
        if natural_frequency is not None:
            self.set_natural_frequency(
                natural_frequency,
                DEFAULT_DAMPING_RATIO if damping_ratio is None else damping_ratio,
            )
        if coefficients:
            self._kernel.configure(**coefficients)
        self._kernel.set(target)
        return self.advance(dt)

    def advance(self, dt: float) -> float:
        """Advance one time step on the input already stored by set()."""
        self._apply_fixed_constants()
        output = self._kernel.advance(dt)

        if self._logger is not None:
            self._logger.log({
                'iteration': self._iteration,
                'dt': dt,
                'input': self._kernel.input,
                'output': output,
                'skipped': int(self._kernel.skipped),
            })
        self._iteration += 1
        return output

    # -- logging ------------------------------------------------------------

    def flush_log(self) -> None:
        """Flush any buffered trace rows to disk."""
        if self._logger is not None:
            self._logger.flush()

    def close(self) -> None:
        """Close the trace log."""
        if self._logger is not None:
            self._logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        details = ", ".join(f"{k}={v:g}" for k, v in self.coefficients.items())
        if self._natural_frequency is not None:
            details += f", wn={self._natural_frequency:g}Hz, zeta={self._damping_ratio:.4f}"
        return f"TustinFilter({self._shape.name}, {details})"


def make_filter(shape: Union[FilterShape, str], **kwargs: Any) -> TustinFilter:
    """
    Create a filter by shape name.

    Example:
        >>> notch = make_filter("notch", natural_frequency=50.0, damping_ratio=0.1)
    """
    return TustinFilter(shape, **kwargs)
