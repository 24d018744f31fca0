"""
Filter configuration.
A serialisable description of a TustinFilter: its shape plus tunable constants.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import json

from tustin_control.core.filters import TustinFilter
from tustin_control.core.kernels import FirstOrderKernel, SecondOrderKernel
from tustin_control.core.shapes import FilterShape, shape_info
from tustin_control.utils.validators import (
    ValidationError,
    validate_enum,
    validate_non_negative,
    validate_positive,
    validate_real,
)


@dataclass
class FilterParams:
    """
    Filter Parameters.

    Example:
        >>> params = FilterParams.from_json('{"shape": "notch", "natural_frequency": 50}')
        >>> notch = params.build()
    """

    shape: FilterShape = FilterShape.FIRST_ORDER_LAG
    coefficients: Dict[str, float] = field(default_factory=dict)
    natural_frequency: Optional[float] = None  # Hz
    damping_ratio: Optional[float] = None

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        self.shape = validate_enum(self.shape, "shape", FilterShape)
        info = shape_info(self.shape)

        kernel_type = FirstOrderKernel if info.order == 1 else SecondOrderKernel
        names = kernel_type.COEFFICIENT_NAMES
        coefficients = {}
        for name, value in self.coefficients.items():
            if name not in names:
                raise ValidationError(
                    f"{self.shape.name} takes coefficients {', '.join(names)}, got {name!r}"
                )
            if name in info.fixed:
                raise ValidationError(
                    f"{name} is fixed at {info.fixed[name]:g} for {self.shape.name}"
                )
            coefficients[name] = validate_real(value, name)
        self.coefficients = coefficients

        if self.natural_frequency is not None:
            if not info.has_natural_frequency:
                raise ValidationError(
                    f"{self.shape.name} has no natural frequency parameter"
                )
            self.natural_frequency = validate_positive(self.natural_frequency, "natural_frequency")
        if self.damping_ratio is not None:
            if not info.has_natural_frequency:
                raise ValidationError(
                    f"{self.shape.name} has no damping ratio parameter"
                )
            self.damping_ratio = validate_non_negative(self.damping_ratio, "damping_ratio")

    def build(self, csv_path: Optional[str] = None) -> TustinFilter:
        """Create a filter configured with these parameters."""
        return TustinFilter(
            self.shape,
            natural_frequency=self.natural_frequency,
            damping_ratio=self.damping_ratio,
            csv_path=csv_path,
            **self.coefficients
        )

    def copy(self, **changes) -> 'FilterParams':
        """Create a copy with optional parameter changes."""
        params = asdict(self)
        params.update(changes)
        return FilterParams(**params)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shape': self.shape.name.lower(),
            'coefficients': dict(self.coefficients),
            'natural_frequency': self.natural_frequency,
            'damping_ratio': self.damping_ratio,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FilterParams':
        data = dict(data)
        data['coefficients'] = dict(data.get('coefficients') or {})
        return cls(**data)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'FilterParams':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))
