"""
Unit tests for PID Controller.
"""

import csv
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tustin_control.core.pid_controller import PIDController, PIDState
from tustin_control.core.pid_params import PIDParams, PIDType, IntegratorType
from tustin_control.utils.validators import ValidationError


def make_pid(**kwargs) -> PIDController:
    return PIDController(PIDParams(**kwargs))


class TestPIDController:
    """Test suite for PIDController class."""

    def test_initialization_default(self):
        """Test default initialization."""
        pid = PIDController()
        assert pid.kp == 1.0
        assert pid.ki == 0.0
        assert pid.kd == 0.0
        assert pid.pid_type is PIDType.STANDARD
        assert pid.integrator_type is IntegratorType.ADAMS_BASHFORTH_2
        assert pid.state == PIDState()

    def test_initialization_with_params(self):
        """Test initialization with custom parameters."""
        pid = make_pid(kp=2.0, ki=0.5, kd=0.1, pid_type="ideal")
        assert pid.kp == 2.0
        assert pid.ki == 0.5
        assert pid.kd == 0.1
        assert pid.pid_type is PIDType.IDEAL

    def test_proportional_only(self):
        """Test P-only controller."""
        pid = make_pid(kp=2.0)
        output = pid.step(error=20.0, dt=0.01)
        assert output == pytest.approx(40.0)

    def test_ideal_form(self):
        """Test ideal form adds independent terms."""
        pid = make_pid(kp=2.0, ki=1.0, kd=0.5, pid_type=PIDType.IDEAL,
                       integrator_type=IntegratorType.RECTANGULAR)
        # derivative = 1 / 0.1 = 10, integration = 1 * 0.1 * 1 = 0.1
        output = pid.step(error=1.0, dt=0.1)
        assert output == pytest.approx(2.0 + 0.1 + 0.5 * 10.0)

    def test_standard_form(self):
        """Test standard form scales every term by Kp."""
        pid = make_pid(kp=2.0, ki=1.0, kd=0.5, pid_type=PIDType.STANDARD,
                       integrator_type=IntegratorType.RECTANGULAR)
        output = pid.step(error=1.0, dt=0.1)
        assert output == pytest.approx(2.0 * (1.0 + 0.1 + 0.5 * 10.0))

    def test_rectangular_integration_exact(self):
        """Test rectangular integral equals Ki*dt*e*n."""
        ki, dt, error, n = 0.5, 0.01, 2.0, 100
        pid = make_pid(kp=0.0, ki=ki, integrator_type=IntegratorType.RECTANGULAR)
        for _ in range(n):
            pid.step(error, dt)
        assert pid.integration == pytest.approx(ki * dt * error * n)

    def test_trapezoidal_integration(self):
        """Test trapezoidal integral with a zero starting error."""
        ki, dt, error, n = 0.5, 0.01, 2.0, 100
        pid = make_pid(ki=ki, integrator_type=IntegratorType.TRAPEZOIDAL)
        for _ in range(n):
            pid.step(error, dt)
        # first tick averages against error_prev == 0
        assert pid.integration == pytest.approx(ki * dt * error * (n - 0.5))

    @pytest.mark.parametrize("integrator", [
        IntegratorType.ADAMS_BASHFORTH_2,
        IntegratorType.ADAMS_BASHFORTH_3,
    ])
    def test_adams_bashforth_integration(self, integrator):
        """Test both multi-step schemes overshoot the start-up by half a step."""
        ki, dt, error, n = 0.5, 0.01, 2.0, 100
        pid = make_pid(ki=ki, integrator_type=integrator)
        for _ in range(n):
            pid.step(error, dt)
        assert pid.integration == pytest.approx(ki * dt * error * (n + 0.5))

    def test_adams_bashforth_3_uses_two_previous_errors(self):
        """Test the 3rd-order delta weights 23/16/5."""
        ki, dt = 12.0, 1.0
        pid = make_pid(ki=ki, integrator_type=IntegratorType.ADAMS_BASHFORTH_3)
        pid.step(1.0, dt)
        pid.step(2.0, dt)
        before = pid.integration
        pid.step(3.0, dt)
        assert pid.integration - before == pytest.approx(23.0 * 3.0 - 16.0 * 2.0 + 5.0 * 1.0)

    @pytest.mark.parametrize("integrator", list(IntegratorType))
    def test_derivative_is_backward_difference(self, integrator):
        """Test the derivative ignores the integrator selection."""
        pid = make_pid(kd=1.0, integrator_type=integrator)
        pid.step(1.0, 0.1)
        pid.step(4.0, 0.1)
        assert pid.state.derivative == pytest.approx(30.0)

    def test_anti_windup_resets_integral(self):
        """Test stop forces the integral to exactly zero."""
        ki, dt, error = 1.0, 0.1, 5.0
        pid = make_pid(ki=ki, integrator_type=IntegratorType.RECTANGULAR)
        for _ in range(10):
            pid.step(error, dt)
        assert pid.integration > 0

        pid.step(error, dt, stop=True)
        assert pid.integration == 0.0
        assert pid.stop

        pid.step(error, dt, stop=True)
        assert pid.integration == 0.0

        pid.step(error, dt, stop=False)
        assert pid.integration == pytest.approx(ki * dt * error)
        assert not pid.stop

    def test_history_shifts_during_stop(self):
        """Test error history advances even while stopped."""
        pid = make_pid(ki=1.0)
        pid.step(1.0, 0.1)
        pid.step(2.0, 0.1, stop=True)
        assert pid.error_prev == 2.0
        assert pid.error_prev2 == 1.0

    def test_error_prev2_maintained_for_rectangular(self):
        """Test the second history sample is kept for every scheme."""
        pid = make_pid(ki=1.0, integrator_type=IntegratorType.RECTANGULAR)
        for error in (1.0, 2.0, 3.0):
            pid.step(error, 0.1)
        assert pid.error == 3.0
        assert pid.error_prev == 3.0
        assert pid.error_prev2 == 2.0

    def test_gain_overrides_in_step(self):
        """Test gains passed to step() are stored."""
        pid = PIDController()
        output = pid.step(1.0, 0.1, kp=3.0, ki=0.0, kd=0.0)
        assert pid.kp == 3.0
        assert output == pytest.approx(3.0)

    def test_zero_dt_raises(self):
        """Test dt == 0 surfaces as a division error."""
        pid = PIDController()
        with pytest.raises(ZeroDivisionError):
            pid.step(1.0, 0.0)
        assert pid.state == PIDState()

    def test_zero_dt_keeps_gains(self):
        """Test a failed step does not apply its gain overrides."""
        pid = make_pid(kp=2.0, ki=0.5, kd=0.1)
        with pytest.raises(ZeroDivisionError):
            pid.step(1.0, 0.0, kp=9.0, ki=9.0, kd=9.0)
        assert pid.params == PIDParams(kp=2.0, ki=0.5, kd=0.1)
        assert pid.state == PIDState()

    def test_get_is_idempotent(self):
        """Test get() has no side effect."""
        pid = make_pid(ki=1.0)
        pid.step(1.0, 0.1)
        assert pid.get() == pid.get() == pid.output

    def test_reset(self):
        """Test controller reset matches a fresh controller."""
        params = PIDParams(kp=1.5, ki=1.0, kd=0.2, pid_type=PIDType.IDEAL,
                           integrator_type=IntegratorType.TRAPEZOIDAL)
        pid = PIDController(params)
        for _ in range(10):
            pid.step(3.0, 0.1)
        pid.step(3.0, 0.1, stop=True)

        pid.reset()

        assert pid.state == PIDController(params).state
        assert pid.params == params
        assert not pid.stop

    def test_configure(self):
        """Test configure() updates gains and scheme selections."""
        pid = PIDController()
        pid.configure(kd=0.3, pid_type="IDEAL", integrator_type="trapezoidal")
        assert pid.kd == 0.3
        assert pid.kp == 1.0
        assert pid.pid_type is PIDType.IDEAL
        assert pid.integrator_type is IntegratorType.TRAPEZOIDAL

    def test_configure_keeps_state(self):
        """Test retuning does not clear the integral."""
        pid = make_pid(ki=1.0)
        for _ in range(5):
            pid.step(1.0, 0.1)
        integration = pid.integration
        pid.set_gains(kp=4.0)
        assert pid.integration == integration

    def test_invalid_gain(self):
        """Test non-numeric gains are rejected."""
        pid = PIDController()
        with pytest.raises(ValidationError):
            pid.kp = "high"

    def test_invalid_integrator(self):
        """Test unknown integrator names are rejected."""
        pid = PIDController()
        with pytest.raises(ValidationError):
            pid.integrator_type = "simpson"

    def test_csv_trace(self, tmp_path):
        """Test each tick is written to the CSV trace."""
        path = tmp_path / "pid.csv"
        with PIDController(PIDParams(ki=1.0), csv_path=str(path)) as pid:
            pid.step(1.0, 0.1)
            pid.step(1.0, 0.1, stop=True)

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))

        assert [row['stop'] for row in rows] == ['0', '1']
        assert float(rows[1]['integration']) == 0.0

    def test_repr(self):
        """Test repr shows the parameters."""
        assert "Kp=1.0000" in repr(PIDController())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
