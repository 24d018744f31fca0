"""
Discrete PID Controller.

Features:
- Ideal (parallel) or standard form
- Rectangular, trapezoidal, 2nd- and 3rd-order Adams-Bashforth integration
- Backward-difference derivative regardless of the integrator
- Stop flag that resets the integral (anti-windup)
- Optional buffered CSV trace
"""

from typing import Optional, Dict, Any, Union
from dataclasses import dataclass

from tustin_control.core.pid_params import PIDParams, PIDType, IntegratorType
from tustin_control.logging.csv_logger import CSVLogger
from tustin_control.utils.validators import validate_enum, validate_real


@dataclass
class PIDState:
    """Transient state of the PID controller."""
    error: float = 0.0
    error_prev: float = 0.0
    error_prev2: float = 0.0
    derivative: float = 0.0
    integration: float = 0.0
    output: float = 0.0
    stop: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary."""
        return {
            'error': self.error,
            'error_prev': self.error_prev,
            'error_prev2': self.error_prev2,
            'derivative': self.derivative,
            'integration': self.integration,
            'output': self.output,
            'stop': self.stop,
        }


class PIDController:
    """
    PID controller driven by an externally computed error.

    There is no uninitialized phase: all accumulators start at zero and the
    first step differentiates against a previous error of zero.

    Example:
        >>> pid = PIDController(PIDParams(kp=2.0, ki=0.5))
        >>> u = pid.step(error=1.0, dt=0.01)
        >>> u = pid.step(error=0.8, dt=0.01, stop=actuator_saturated)
    """

    def __init__(
        self,
        params: Optional[PIDParams] = None,
        csv_path: Optional[str] = None
    ):
        """
        Initialize PID controller.

        Args:
            params: PID parameters (uses defaults if None)
            csv_path: Path for CSV logging (no logging if None)
        """
        self._kp = 1.0
        self._ki = 0.0
        self._kd = 0.0
        self._pid_type = PIDType.STANDARD
        self._integrator_type = IntegratorType.ADAMS_BASHFORTH_2
        self.set_params(params if params is not None else PIDParams())

        self._state = PIDState()
        self._iteration: int = 0

        self._logger: Optional[CSVLogger] = None
        if csv_path is not None:
            self._logger = CSVLogger(
                csv_path,
                columns=[
                    'iteration', 'dt', 'error', 'derivative',
                    'integration', 'output', 'stop'
                ]
            )

    # -- configuration ------------------------------------------------------

    @property
    def params(self) -> PIDParams:
        """Snapshot of the current configuration."""
        return PIDParams(
            kp=self._kp, ki=self._ki, kd=self._kd,
            pid_type=self._pid_type,
            integrator_type=self._integrator_type
        )

    @property
    def kp(self) -> float:
        return self._kp

    @kp.setter
    def kp(self, value: float) -> None:
        self._kp = validate_real(value, "kp")

    @property
    def ki(self) -> float:
        return self._ki

    @ki.setter
    def ki(self, value: float) -> None:
        self._ki = validate_real(value, "ki")

    @property
    def kd(self) -> float:
        return self._kd

    @kd.setter
    def kd(self, value: float) -> None:
        self._kd = validate_real(value, "kd")

    @property
    def pid_type(self) -> PIDType:
        return self._pid_type

    @pid_type.setter
    def pid_type(self, value: Union[PIDType, str]) -> None:
        self._pid_type = validate_enum(value, "pid_type", PIDType)

    @property
    def integrator_type(self) -> IntegratorType:
        return self._integrator_type

    @integrator_type.setter
    def integrator_type(self, value: Union[IntegratorType, str]) -> None:
        self._integrator_type = validate_enum(value, "integrator_type", IntegratorType)

    def set_params(self, params: PIDParams) -> None:
        """Replace gains and scheme selection; transient state is kept."""
        self._kp = params.kp
        self._ki = params.ki
        self._kd = params.kd
        self._pid_type = params.pid_type
        self._integrator_type = params.integrator_type

    def set_gains(
        self,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None
    ) -> None:
        """
        Update individual gains.

        Args:
            kp: New proportional gain (None to keep current)
            ki: New integral gain (None to keep current)
            kd: New derivative gain (None to keep current)
        """
        if kp is not None:
            self.kp = kp
        if ki is not None:
            self.ki = ki
        if kd is not None:
            self.kd = kd

    def configure(
        self,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None,
        pid_type: Optional[Union[PIDType, str]] = None,
        integrator_type: Optional[Union[IntegratorType, str]] = None
    ) -> None:
        """Update any subset of gains and scheme selections."""
        self.set_gains(kp, ki, kd)
        if pid_type is not None:
            self.pid_type = pid_type
        if integrator_type is not None:
            self.integrator_type = integrator_type

    # -- state --------------------------------------------------------------

    @property
    def state(self) -> PIDState:
        """Copy of the current transient state."""
        return PIDState(**self._state.to_dict())

    @property
    def output(self) -> float:
        return self._state.output

    @property
    def integration(self) -> float:
        return self._state.integration

    @property
    def error(self) -> float:
        return self._state.error

    @property
    def error_prev(self) -> float:
        return self._state.error_prev

    @property
    def error_prev2(self) -> float:
        return self._state.error_prev2

    @property
    def stop(self) -> bool:
        return self._state.stop

    def get(self) -> float:
        """Last computed output."""
        return self._state.output

    # -- stepping -----------------------------------------------------------

    def step(
        self,
        error: float,
        dt: float,
        stop: bool = False,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None
    ) -> float:
        """
        Advance the controller by one tick.

        Args:
            error: Current error (target - measurement)
            dt: Time step in seconds; dt == 0 raises ZeroDivisionError
            stop: Anti-windup flag; resets the integral to 0 for this tick
            kp, ki, kd: Optional new gains stored before computing

        Returns:
            Control output
        """
        state = self._state
        derivative = (error - state.error_prev) / dt
        self.set_gains(kp, ki, kd)

        state.error = error
        state.stop = stop
        state.derivative = derivative

        if stop:
            state.integration = 0.0
        else:
            state.integration += self._integration_delta(dt)

        if self._pid_type is PIDType.IDEAL:
            state.output = (
                self._kp * error + state.integration + self._kd * state.derivative
            )
        else:
            state.output = self._kp * (
                error + state.integration + self._kd * state.derivative
            )

        if self._logger is not None:
            self._logger.log({
                'iteration': self._iteration,
                'dt': dt,
                'error': error,
                'derivative': state.derivative,
                'integration': state.integration,
                'output': state.output,
                'stop': int(stop),
            })

        state.error_prev2 = state.error_prev
        state.error_prev = error
        self._iteration += 1

        return state.output

    def _integration_delta(self, dt: float) -> float:
        """Integral increment for the selected scheme."""
        state = self._state
        ki = self._ki
        if self._integrator_type is IntegratorType.RECTANGULAR:
            return ki * dt * state.error
        if self._integrator_type is IntegratorType.TRAPEZOIDAL:
            return (ki / 2.0) * dt * (state.error + state.error_prev)
        if self._integrator_type is IntegratorType.ADAMS_BASHFORTH_2:
            return ki * dt * (1.5 * state.error - 0.5 * state.error_prev)
        # ADAMS_BASHFORTH_3
        return (ki / 12.0) * dt * (
            23.0 * state.error - 16.0 * state.error_prev + 5.0 * state.error_prev2
        )

    def reset(self) -> None:
        """Reset transient state; gains and scheme selections are kept."""
        self._state = PIDState()
        self._iteration = 0

    # -- logging ------------------------------------------------------------

    def flush_log(self) -> None:
        """Flush any buffered log data to disk."""
        if self._logger is not None:
            self._logger.flush()

    def close(self) -> None:
        """Close controller and flush logs."""
        if self._logger is not None:
            self._logger.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return f"PIDController({self.params})"
