"""
Tustin recurrence kernels.

Two engines cover every filter shape:

- FirstOrderKernel runs y[k] = ca*x[k] + cb*x[k-1] + cc*y[k-1], where the
  discrete coefficients (ca, cb, cc) come from a shape-supplied recurrence
  function of (c1..c4, dt).
- SecondOrderKernel runs the bilinear transform of
  (c1*s^2 + c2*s + c3) / (c4*s^2 + c5*s + c6) directly.

A zero denominator skips the step and leaves the output untouched.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from tustin_control.utils.validators import ValidationError, validate_real


# (c1..c4, dt) -> (ca, cb, cc), or None when the denominator is zero
Recurrence = Callable[[Sequence[float], float], Optional[Tuple[float, float, float]]]

# (coefficients, input) -> output used when the kernel is initialized
InitialOutput = Callable[[Sequence[float], float], float]


class FilterStatus(Enum):
    """Lifecycle of a filter kernel."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class FilterState:
    """Snapshot of the transient state of a kernel."""
    status: FilterStatus
    input: float
    output: float
    previous_inputs: Tuple[float, ...]
    previous_outputs: Tuple[float, ...]


def snap_to_input(coefficients: Sequence[float], value: float) -> float:
    """Default first-order init rule: the output starts at the input."""
    return value


def steady_state_gain(coefficients: Sequence[float], value: float) -> float:
    """Second-order init rule: pre-warm to (c3/c6) * input."""
    c3, c6 = coefficients[2], coefficients[5]
    if c6 != 0.0:
        return (c3 / c6) * value
    return 0.0


class _Kernel(ABC):
    """State machine shared by both kernels."""

    ORDER: int = 0
    COEFFICIENT_NAMES: Tuple[str, ...] = ()
    DEFAULT_COEFFICIENTS: Tuple[float, ...] = ()

    def __init__(self, initial_output: InitialOutput):
        self._initial_output = initial_output
        self._coefficients = list(self.DEFAULT_COEFFICIENTS)
        self._input: float = 0.0
        self._output: float = 0.0
        self._status = FilterStatus.UNINITIALIZED
        self._skipped: bool = False
        self._clear_history()

    # -- coefficients -------------------------------------------------------

    @property
    def order(self) -> int:
        return self.ORDER

    @property
    def coefficients(self) -> Dict[str, float]:
        """Continuous-time constants keyed by name (c1, c2, ...)."""
        return dict(zip(self.COEFFICIENT_NAMES, self._coefficients))

    def configure(self, **coefficients: float) -> None:
        """
        Set any subset of the continuous-time constants.

        Args:
            **coefficients: Values keyed c1..c4 (order 1) or c1..c6 (order 2)

        Raises:
            ValidationError: On an unknown name or a non-numeric value
        """
        updates = {}
        for name, value in coefficients.items():
            if name not in self.COEFFICIENT_NAMES:
                raise ValidationError(
                    f"unknown coefficient {name!r}, expected one of "
                    f"{', '.join(self.COEFFICIENT_NAMES)}"
                )
            updates[self.COEFFICIENT_NAMES.index(name)] = validate_real(value, name)
        for index, value in updates.items():
            self._coefficients[index] = value

    # -- state machine ------------------------------------------------------

    @property
    def status(self) -> FilterStatus:
        return self._status

    @property
    def initialized(self) -> bool:
        return self._status is FilterStatus.READY

    @property
    def input(self) -> float:
        return self._input

    @property
    def output(self) -> float:
        return self._output

    @property
    def skipped(self) -> bool:
        """True when the last step hit a zero denominator."""
        return self._skipped

    def set(self, target: float) -> None:
        """Store the input (target) without computing anything."""
        self._input = target

    def get(self) -> float:
        """Last computed output."""
        return self._output

    def init(self, target: Optional[float] = None) -> None:
        """
        Start the filter without a transient.

        Args:
            target: Optional input to set before initializing
        """
        if target is not None:
            self.set(target)
        self._output = self._initial_output(self._coefficients, self._input)
        self._seed_history()
        self._status = FilterStatus.READY

    def reset(self) -> None:
        """Clear input, output and history; coefficients are kept."""
        self._input = 0.0
        self._output = 0.0
        self._status = FilterStatus.UNINITIALIZED
        self._skipped = False
        self._clear_history()

    def step(self, target: float, dt: float) -> float:
        """
        Advance one time step towards a new target.

        Args:
            target: New input value
            dt: Time step in seconds (caller guarantees dt > 0)

        Returns:
            The new output (unchanged if the step was skipped)
        """
        self._input = target
        return self.advance(dt)

    def advance(self, dt: float) -> float:
        """Advance one time step on the input already stored by set()."""
        if self._status is FilterStatus.UNINITIALIZED:
            self.init()
        self._skipped = not self._run(dt)
        return self._output

    @property
    def state(self) -> FilterState:
        return FilterState(
            status=self._status,
            input=self._input,
            output=self._output,
            previous_inputs=self._previous_inputs(),
            previous_outputs=self._previous_outputs(),
        )

    # -- hooks --------------------------------------------------------------

    @abstractmethod
    def _clear_history(self) -> None:
        """Zero the input and output history."""
        pass

    @abstractmethod
    def _seed_history(self) -> None:
        """Fill the history from the current input and output."""
        pass

    @abstractmethod
    def _run(self, dt: float) -> bool:
        """Run one recurrence step; False when the denominator is zero."""
        pass

    @abstractmethod
    def _previous_inputs(self) -> Tuple[float, ...]:
        pass

    def _previous_outputs(self) -> Tuple[float, ...]:
        return ()


class FirstOrderKernel(_Kernel):
    """Single-pole recurrence with one sample of input history."""

    ORDER = 1
    COEFFICIENT_NAMES = ("c1", "c2", "c3", "c4")
    DEFAULT_COEFFICIENTS = (1.0, 0.0, 0.0, 0.0)

    def __init__(self, recurrence: Recurrence, initial_output: InitialOutput = snap_to_input):
        self._recurrence = recurrence
        super().__init__(initial_output)

    @property
    def previous_input(self) -> float:
        return self._previous_input

    def discrete_coefficients(self, dt: float) -> Optional[Tuple[float, float, float]]:
        """(ca, cb, cc) for the given step, or None if degenerate."""
        return self._recurrence(self._coefficients, dt)

    def _clear_history(self) -> None:
        self._previous_input = 0.0

    def _seed_history(self) -> None:
        self._previous_input = self._input

    def _run(self, dt: float) -> bool:
        discrete = self._recurrence(self._coefficients, dt)
        if discrete is None:
            return False
        ca, cb, cc = discrete
        self._output = ca * self._input + cb * self._previous_input + cc * self._output
        self._previous_input = self._input
        return True

    def _previous_inputs(self) -> Tuple[float, ...]:
        return (self._previous_input,)


class SecondOrderKernel(_Kernel):
    """
    Two-pole recurrence for (c1*s^2 + c2*s + c3) / (c4*s^2 + c5*s + c6).

    Initialization pre-warms the output to the steady-state gain c3/c6 so a
    filter started on a constant input produces no transient.
    """

    ORDER = 2
    COEFFICIENT_NAMES = ("c1", "c2", "c3", "c4", "c5", "c6")
    DEFAULT_COEFFICIENTS = (1.0, 1.0, 1.0, 1.0, 1.0, 1.0)

    def __init__(self, initial_output: InitialOutput = steady_state_gain):
        super().__init__(initial_output)

    @property
    def previous_input1(self) -> float:
        return self._previous_input1

    @property
    def previous_input2(self) -> float:
        return self._previous_input2

    @property
    def previous_output1(self) -> float:
        return self._previous_output1

    @property
    def previous_output2(self) -> float:
        return self._previous_output2

    def discrete_coefficients(
        self, dt: float
    ) -> Optional[Tuple[float, float, float, float, float]]:
        """(ca, cb, cc, cd, ce) for the given step, or None if degenerate."""
        c1, c2, c3, c4, c5, c6 = self._coefficients
        dt2 = dt * dt
        den = 4.0 * c4 + 2.0 * c5 * dt + c6 * dt2
        if den == 0.0:
            return None
        return (
            (4.0 * c1 + 2.0 * c2 * dt + c3 * dt2) / den,
            (2.0 * c3 * dt2 - 8.0 * c1) / den,
            (4.0 * c1 - 2.0 * c2 * dt + c3 * dt2) / den,
            (2.0 * c6 * dt2 - 8.0 * c4) / den,
            (4.0 * c4 - 2.0 * c5 * dt + c6 * dt2) / den,
        )

    def _clear_history(self) -> None:
        self._previous_input1 = self._previous_input2 = 0.0
        self._previous_output1 = self._previous_output2 = 0.0

    def _seed_history(self) -> None:
        self._previous_input1 = self._previous_input2 = self._input
        self._previous_output1 = self._previous_output2 = self._output

    def _run(self, dt: float) -> bool:
        discrete = self.discrete_coefficients(dt)
        if discrete is None:
            return False
        ca, cb, cc, cd, ce = discrete
        self._output = (
            ca * self._input
            + cb * self._previous_input1
            + cc * self._previous_input2
            - cd * self._previous_output1
            - ce * self._previous_output2
        )
        self._previous_input2 = self._previous_input1
        self._previous_input1 = self._input
        self._previous_output2 = self._previous_output1
        self._previous_output1 = self._output
        return True

    def _previous_inputs(self) -> Tuple[float, ...]:
        return (self._previous_input1, self._previous_input2)

    def _previous_outputs(self) -> Tuple[float, ...]:
        return (self._previous_output1, self._previous_output2)
