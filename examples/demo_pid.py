#!/usr/bin/env python3
"""
PID Controller Demo

Demonstrates:
- Ideal vs. standard controller form
- Comparing integration schemes on the same loop
- Stop-driven anti-windup under actuator saturation
- CSV logging
"""

import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from tustin_control.core.filters import TustinFilter
from tustin_control.core.pid_controller import PIDController
from tustin_control.core.pid_params import PIDParams, PIDType, IntegratorType
from tustin_control.core.shapes import FilterShape
from tustin_control.analysis import (
    FilterPlotter,
    ResponseResult,
    step_response_metrics,
)


def simulate_loop(
    controller: PIDController,
    setpoint: float,
    duration: float,
    dt: float,
    output_limit: Optional[float] = None,
    label: str = ""
) -> ResponseResult:
    """
    Close the loop around a first-order lag plant.

    When output_limit is given the actuator saturates and the controller
    is stopped for every saturated tick.
    """
    plant = TustinFilter(FilterShape.FIRST_ORDER_LAG, c1=0.5)
    plant.init(0.0)
    controller.reset()

    n = int(duration / dt)
    timestamps = np.arange(1, n + 1) * dt
    measurements = np.empty(n)
    saturated = False
    measurement = 0.0

    for k in range(n):
        error = setpoint - measurement
        command = controller.step(error, dt, stop=saturated)
        if output_limit is not None:
            saturated = abs(command) > output_limit
            command = float(np.clip(command, -output_limit, output_limit))
        measurement = plant.step(command, dt)
        measurements[k] = measurement

    return ResponseResult(
        timestamps=timestamps,
        inputs=np.full(n, setpoint),
        outputs=measurements,
        label=label or repr(controller),
    )


def print_metrics(result: ResponseResult, setpoint: float):
    metrics = step_response_metrics(result.timestamps, setpoint, result.outputs)
    print(f"\n{result.label}")
    print(f"  Rise Time: {metrics.rise_time:.3f}s")
    print(f"  Settling Time (2%): {metrics.settling_time:.3f}s")
    print(f"  Overshoot: {metrics.overshoot_percent:.1f}%")
    print(f"  Final Value: {metrics.final_value:.4f}")


def demo_integrators(plotter: FilterPlotter, dt: float):
    """Same gains, different integration schemes."""
    print("\n" + "=" * 60)
    print("Integration Schemes")
    print("=" * 60)

    results = []
    for integrator in IntegratorType:
        params = PIDParams(kp=2.0, ki=1.5, kd=0.05, pid_type=PIDType.IDEAL,
                           integrator_type=integrator)
        result = simulate_loop(PIDController(params), 1.0, 10.0, dt,
                               label=integrator.value)
        print_metrics(result, 1.0)
        results.append(result)

    return plotter.plot_response(results, title="PID Integration Schemes (dt = 50 ms)")


def demo_forms(dt: float):
    """The standard form scales Ki and Kd by Kp."""
    print("\n" + "=" * 60)
    print("Ideal vs. Standard Form")
    print("=" * 60)

    for pid_type in PIDType:
        params = PIDParams(kp=2.0, ki=0.5, kd=0.0, pid_type=pid_type)
        result = simulate_loop(PIDController(params), 1.0, 10.0, dt,
                               label=f"{pid_type.value} form")
        print_metrics(result, 1.0)


def demo_anti_windup(plotter: FilterPlotter, dt: float):
    """Saturated actuator with and without stop-driven reset."""
    print("\n" + "=" * 60)
    print("Anti-Windup Under Saturation")
    print("=" * 60)

    params = PIDParams(kp=3.0, ki=4.0, pid_type=PIDType.IDEAL,
                       integrator_type=IntegratorType.TRAPEZOIDAL)

    with PIDController(params, csv_path="output/pid_anti_windup.csv") as pid:
        with_stop = simulate_loop(pid, 1.0, 10.0, dt, output_limit=1.5,
                                  label="stop on saturation")
    print_metrics(with_stop, 1.0)

    # No limit, so the stop flag is never raised
    windup = PIDController(params)
    unlimited = simulate_loop(windup, 1.0, 10.0, dt, label="unsaturated")
    print_metrics(unlimited, 1.0)

    print("\nTrace written to output/pid_anti_windup.csv")
    return plotter.plot_response([with_stop, unlimited], title="Stop-Driven Anti-Windup")


def main():
    print("=" * 60)
    print("PID Controller Demo")
    print("=" * 60)

    dt = 0.05
    plotter = FilterPlotter()

    demo_forms(dt)
    demo_integrators(plotter, dt)
    demo_anti_windup(plotter, dt)

    print("\nClose plot windows to exit.")
    FilterPlotter.show()


if __name__ == "__main__":
    Path("output").mkdir(exist_ok=True)
    main()
