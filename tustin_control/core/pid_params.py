"""
PID Controller Parameters Configuration.
Encapsulates gains and numerical scheme selection in a validated structure.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any
from enum import Enum
import json

from tustin_control.utils.validators import validate_enum, validate_real


class PIDType(Enum):
    """Controller form."""
    IDEAL = "ideal"        # Kp*e + I + Kd*de/dt (parallel gains)
    STANDARD = "standard"  # Kp*(e + I + Kd*de/dt)


class IntegratorType(Enum):
    """Numerical scheme for the integral term."""
    RECTANGULAR = "rectangular"
    TRAPEZOIDAL = "trapezoidal"
    ADAMS_BASHFORTH_2 = "adams_bashforth_2"
    ADAMS_BASHFORTH_3 = "adams_bashforth_3"


@dataclass
class PIDParams:
    """
    PID Controller Parameters.

    Gains may be negative (reverse-acting loops); only their type is checked.
    Enum fields accept members, values or member names.
    """

    kp: float = 1.0  # Proportional gain
    ki: float = 0.0  # Integral gain
    kd: float = 0.0  # Derivative gain

    pid_type: PIDType = PIDType.STANDARD
    integrator_type: IntegratorType = IntegratorType.ADAMS_BASHFORTH_2

    def __post_init__(self):
        """Validate and normalize parameters after initialization."""
        self.kp = validate_real(self.kp, "kp")
        self.ki = validate_real(self.ki, "ki")
        self.kd = validate_real(self.kd, "kd")
        self.pid_type = validate_enum(self.pid_type, "pid_type", PIDType)
        self.integrator_type = validate_enum(
            self.integrator_type, "integrator_type", IntegratorType
        )

    def copy(self, **changes) -> 'PIDParams':
        """Create a copy with optional parameter changes."""
        params = asdict(self)
        params.update(changes)
        return PIDParams(**params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'kp': self.kp,
            'ki': self.ki,
            'kd': self.kd,
            'pid_type': self.pid_type.value,
            'integrator_type': self.integrator_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PIDParams':
        """Create from dictionary; enum fields are coerced in __post_init__."""
        return cls(**data)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'PIDParams':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        return (
            f"PIDParams(Kp={self.kp:.4f}, Ki={self.ki:.4f}, Kd={self.kd:.4f}, "
            f"type={self.pid_type.value}, integrator={self.integrator_type.value})"
        )


class PIDPresets:
    """Common PID parameter presets."""

    @staticmethod
    def proportional(kp: float = 1.0) -> PIDParams:
        """P-only controller."""
        return PIDParams(kp=kp, pid_type=PIDType.IDEAL)

    @staticmethod
    def ideal_pi(kp: float = 1.0, ki: float = 0.5) -> PIDParams:
        """Parallel PI with exact rectangular integration."""
        return PIDParams(
            kp=kp, ki=ki,
            pid_type=PIDType.IDEAL,
            integrator_type=IntegratorType.RECTANGULAR
        )

    @staticmethod
    def standard_pid(kp: float = 1.0, ki: float = 0.5, kd: float = 0.1) -> PIDParams:
        """Standard-form PID with the default 2nd-order Adams-Bashforth integrator."""
        return PIDParams(kp=kp, ki=ki, kd=kd)

    @staticmethod
    def high_order_pi(kp: float = 1.0, ki: float = 0.5) -> PIDParams:
        """Standard-form PI with 3rd-order Adams-Bashforth integration."""
        return PIDParams(
            kp=kp, ki=ki,
            integrator_type=IntegratorType.ADAMS_BASHFORTH_3
        )
