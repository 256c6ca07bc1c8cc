# benchmarks/metrics/step_response.py
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Dict, Optional


def compute_step_metrics(time: List[float], values: List[float], setpoint: float, tolerance: float = 0.02) -> Dict[str, float]:
    """Step response figures of merit for a sampled trajectory.

    Overshoot is measured past the setpoint in the direction of travel from
    the initial value, as a fraction of the initial distance. Settling time is
    the first time after which the trajectory stays within tolerance * that
    distance of the setpoint; inf if it never settles.
    """
    t = np.asarray(time, dtype=float)
    y = np.asarray(values, dtype=float)
    if t.shape != y.shape or t.size < 2:
        raise ValueError("time and values must have the same length (>= 2)")

    error = setpoint - y
    dt = np.diff(t)
    iae = float(np.sum(np.abs(error[1:]) * dt))
    ise = float(np.sum(error[1:] ** 2 * dt))

    span = setpoint - y[0]
    if span == 0:
        overshoot = 0.0
        band = tolerance
    else:
        overshoot = float(max(0.0, np.max((y - setpoint) * np.sign(span)) / abs(span)))
        band = tolerance * abs(span)

    outside = np.nonzero(np.abs(error) > band)[0]
    if outside.size == 0:
        settling_time = float(t[0])
    elif outside[-1] == t.size - 1:
        settling_time = float('inf')
    else:
        settling_time = float(t[outside[-1] + 1])

    return {
        "iae": iae,
        "ise": ise,
        "overshoot": overshoot,
        "settling_time": settling_time,
        "steady_state_error": float(error[-1])
    }


def plot_step_response(time: List[float], values: List[float], setpoint: float,
                       outputs: Optional[List[float]] = None, save_path: str = None, config_label: str = ""):
    n_rows = 2 if outputs is not None else 1
    plt.figure(figsize=(10, 3 * n_rows + 1))

    plt.subplot(n_rows, 1, 1)
    plt.plot(time, values, label="Process value")
    plt.plot(time, [setpoint] * len(time), 'k--', label="Setpoint")
    plt.ylabel("Value")
    plt.title(f"Step Response {config_label}")
    plt.grid(True)
    plt.legend()

    if outputs is not None:
        plt.subplot(n_rows, 1, 2)
        plt.step(time[:len(outputs)], outputs, where="post", label="Controller output")
        plt.ylabel("Output")
        plt.grid(True)
        plt.legend()
    plt.xlabel("Time (s)")

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
    else:
        plt.show()
    plt.close()
