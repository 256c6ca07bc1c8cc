import numpy as np
from scipy.integrate import solve_ivp
from discrete_pid import Controller
from benchmarks.metrics.step_response import compute_step_metrics, plot_step_response
from benchmarks.metrics.statistical_tests import StatisticalValidator
import os
import json
import logging
import warnings
from typing import List, Dict, Optional

logger = logging.getLogger(__name__)


class PendulumSimulator:
    def __init__(self, m: float = 1.0, l: float = 1.0, g: float = 9.81, b: float = 0.1):
        self.m = m
        self.l = l
        self.g = g
        self.b = b

    def dynamics(self, state: np.ndarray, torque: float) -> np.ndarray:
        theta, dtheta = state
        inertia = self.m * self.l ** 2
        ddtheta = -self.g / self.l * np.sin(theta) - self.b / inertia * dtheta + torque / inertia
        return np.array([dtheta, ddtheta])

    def simulate(self, torque: float, state: np.ndarray, dt: float) -> np.ndarray:
        """Advance the pendulum by one sample period holding the torque constant."""
        if not np.isscalar(torque):
            raise ValueError(f"Torque must be scalar, got shape {np.shape(torque)}")
        sol = solve_ivp(lambda t, y: self.dynamics(y, torque), [0, dt], state, method="RK45", t_eval=[dt])
        return sol.y[:, -1]


class PendulumBenchmark:
    """Drives a pendulum from rest to a target angle with a Controller.

    The controller output is a torque, saturated to +/- max_torque by the
    controller's output limits, so integral windup matters whenever the
    proportional term alone saturates the actuator.
    """

    def __init__(self, n_trials: int = 15, setpoint: float = np.pi / 6, duration: float = 5.0,
                 max_torque: float = 10.0, noise_level: float = 0.002, output_dir: Optional[str] = None):
        if n_trials < 1:
            raise ValueError("At least one trial is required")
        self.n_trials = n_trials
        self.setpoint = setpoint
        self.duration = duration
        self.max_torque = max_torque
        self.noise_level = noise_level
        self.output_dir = output_dir
        self.simulator = PendulumSimulator()
        self.validator = StatisticalValidator()

    def run_single_trial(self, trial_id: int, config: Dict, label: str = "pid") -> Dict:
        rng = np.random.default_rng(42 + trial_id)
        pid = Controller(**{'output_limits': (-self.max_torque, self.max_torque), **config})

        dt = pid.sample_period
        n_steps = int(round(self.duration * pid.sample_rate))
        state = np.array([rng.uniform(-0.05, 0.05), 0.0])

        previous = state[0] + rng.normal(0, self.noise_level)
        angles = [state[0]]
        outputs = []
        for _ in range(n_steps):
            measured = state[0] + rng.normal(0, self.noise_level)
            torque = pid.get_output(self.setpoint, measured, previous)
            previous = measured

            state = self.simulator.simulate(torque, state, dt)
            angles.append(state[0])
            outputs.append(torque)

        time = np.arange(n_steps + 1) * dt
        metrics = compute_step_metrics(time, angles, self.setpoint)
        if np.isinf(metrics['settling_time']):
            warnings.warn(f"Trial {trial_id} ({label}) did not settle within {self.duration:.1f}s")

        if self.output_dir and trial_id % 5 == 0:
            plot_step_response(time, angles, self.setpoint, outputs=outputs,
                               save_path=os.path.join(self.output_dir, f"pendulum_trial_{label}_{trial_id}.png"),
                               config_label=f"({label}, trial {trial_id})")

        return {
            'trial_id': trial_id,
            'metrics': metrics,
            'diagnostics': pid.get_diagnostics(),
            'angle_history': angles,
            'output_history': outputs
        }

    def run_benchmark(self, config: Dict, label: str = "pid") -> Dict:
        logger.info("Running %s benchmark with %d trials", label, self.n_trials)
        results = [self.run_single_trial(trial, config, label) for trial in range(self.n_trials)]
        return self._analyze_results(results)

    def _analyze_results(self, results: List[Dict]) -> Dict:
        iae = [r['metrics']['iae'] for r in results]
        overshoot = [r['metrics']['overshoot'] for r in results]
        settling = [r['metrics']['settling_time'] for r in results]
        settled = [s for s in settling if np.isfinite(s)]

        return {
            'summary_statistics': {
                'iae': self.validator.summarize(iae),
                'overshoot': self.validator.summarize(overshoot),
                'settling_time': self.validator.summarize(settled),
                'settled_fraction': len(settled) / len(settling)
            },
            'raw_results': results
        }

    def compare_configurations(self, config1: Dict, config2: Dict, config1_name: str = "Default",
                               config2_name: str = "Alternative") -> Dict:
        logger.info("Comparing %s and %s", config1_name, config2_name)
        results1 = self.run_benchmark(config1, config1_name)
        results2 = self.run_benchmark(config2, config2_name)

        iae1 = [r['metrics']['iae'] for r in results1['raw_results']]
        iae2 = [r['metrics']['iae'] for r in results2['raw_results']]

        return {
            config1_name: results1['summary_statistics'],
            config2_name: results2['summary_statistics'],
            'statistical_tests': {
                f'{config1_name}_vs_{config2_name}': self.validator.compare(iae1, iae2)
            }
        }


def run_statistical_benchmark(output_dir: str = "benchmarks/results", n_trials: int = 15) -> Dict:
    os.makedirs(output_dir, exist_ok=True)
    benchmark = PendulumBenchmark(n_trials=n_trials, output_dir=output_dir)
    # kd is negative: the derivative on measurement is added to the output
    anti_windup_config = {
        'kp': 20.0,
        'ki': 15.0,
        'kd': -3.0,
        'sample_rate': 100.0,
        'integral_limit': 6.0
    }
    unbounded_config = anti_windup_config.copy()
    unbounded_config['integral_limit'] = np.inf

    comparison = benchmark.compare_configurations(anti_windup_config, unbounded_config, "AntiWindup", "Unbounded")
    with open(os.path.join(output_dir, "pendulum_statistical_benchmark.json"), "w") as f:
        json.dump(comparison, f, indent=2, default=str)

    tests = comparison['statistical_tests']['AntiWindup_vs_Unbounded']
    logger.info("Statistical benchmark completed")
    logger.info("AntiWindup vs Unbounded significant IAE difference: %s", tests['significant_difference'])
    return comparison


if __name__ == "__main__":
    run_statistical_benchmark()
