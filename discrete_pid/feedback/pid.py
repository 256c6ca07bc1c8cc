# discrete_pid/feedback/pid.py
import logging
import math
import numpy as np
from typing import Tuple

logger = logging.getLogger(__name__)


def truncate_pos_or_neg(value: float, limit: float) -> float:
    """Saturate value symmetrically into [-limit, limit]."""
    if value > limit:
        return limit
    elif value < -limit:
        return -limit
    return value


class Controller:
    """Discrete PID controller for a loop running at a fixed sample rate.

    Gains are passed in per unit time and stored scaled to per-sample form:
    ki' = ki / sample_rate and kd' = kd * sample_rate. The derivative acts on
    the measured value and is added to the output, so a damping derivative
    needs a kd whose sign opposes the plant's response.
    """

    def __init__(self,
                 kp: float,
                 ki: float,
                 kd: float,
                 sample_rate: float,
                 integral_limit: float,
                 output_limits: Tuple[float, float] = (-np.inf, np.inf)):
        self.validate_params(sample_rate, integral_limit, output_limits)

        self._sample_rate = float(sample_rate)
        self._kp, self._ki, self._kd = self._scale_terms(kp, ki, kd)
        self._reverse_output = False
        self._integral = 0.0
        self._integral_limit = float(integral_limit)
        self._output_limits = (float(output_limits[0]), float(output_limits[1]))

        self.last_p = 0.0
        self.last_i = 0.0
        self.last_d = 0.0

    def validate_params(self, sample_rate: float, integral_limit: float, output_limits: Tuple[float, float]):
        if not (math.isfinite(sample_rate) and sample_rate > 0):
            raise ValueError("Sample rate must be positive and finite")
        self._validate_integral_limit(integral_limit)
        if len(output_limits) != 2:
            raise ValueError("Output limits must be a (low, high) pair")
        low, high = output_limits
        if math.isnan(low) or math.isnan(high) or low > high:
            raise ValueError("Output limits must satisfy low <= high")

    @staticmethod
    def _validate_integral_limit(limit: float):
        if math.isnan(limit) or limit < 0:
            raise ValueError("Integral limit must be non-negative")

    def _scale_terms(self, kp: float, ki: float, kd: float) -> Tuple[float, float, float]:
        for name, gain in (("kp", kp), ("ki", ki), ("kd", kd)):
            if not math.isfinite(gain):
                raise ValueError(f"Gain {name} must be finite, got {gain}")
        sample_period = 1.0 / self._sample_rate
        return float(kp), ki * sample_period, kd * self._sample_rate

    @property
    def kp(self) -> float:
        return self._kp

    @property
    def ki(self) -> float:
        return self._ki

    @property
    def kd(self) -> float:
        return self._kd

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def sample_period(self) -> float:
        return 1.0 / self._sample_rate

    @property
    def integral(self) -> float:
        return self._integral

    @property
    def integral_limit(self) -> float:
        return self._integral_limit

    @property
    def reverse_output(self) -> bool:
        return self._reverse_output

    @property
    def output_limits(self) -> Tuple[float, float]:
        return self._output_limits

    def get_terms(self) -> Tuple[float, float, float]:
        return self._kp, self._ki, self._kd

    def set_reverse_output(self, reverse_output: bool):
        self._reverse_output = bool(reverse_output)
        logger.debug("Output polarity reversed: %s", self._reverse_output)

    def update_terms(self, kp: float, ki: float, kd: float):
        """Retune with raw gains; the accumulated integral is kept as is."""
        self._kp, self._ki, self._kd = self._scale_terms(kp, ki, kd)
        logger.debug("Terms updated: kp=%g ki=%g kd=%g (scaled)", self._kp, self._ki, self._kd)

    def update_integral_limit(self, integral_limit: float):
        """Set a new windup bound and truncate the accumulator into it."""
        self._validate_integral_limit(integral_limit)
        self._integral_limit = float(integral_limit)
        self._integral = truncate_pos_or_neg(self._integral, self._integral_limit)
        logger.debug("Integral limit set to %g, integral now %g", self._integral_limit, self._integral)

    def clear_integral(self):
        self._integral = 0.0
        logger.debug("Integral cleared")

    def get_output(self, setpoint: float, current_value: float, previous_value: float) -> float:
        """Compute one sample of controller output.

        Call once per sample period; every call advances the integral, so
        repeated calls with the same arguments return different values.
        """
        error = setpoint - current_value

        increment = self._ki * error
        # a non-finite sample leaves the clamped integral as it was
        if math.isfinite(increment):
            self._integral = truncate_pos_or_neg(self._integral + increment, self._integral_limit)

        self.last_p = self._kp * error
        self.last_i = self._integral
        self.last_d = self._kd * (current_value - previous_value)
        output = self.last_p + self.last_i + self.last_d

        if self._reverse_output:
            output = -output

        return float(np.clip(output, self._output_limits[0], self._output_limits[1]))

    def get_diagnostics(self) -> dict:
        return {
            'kp': self._kp,
            'ki': self._ki,
            'kd': self._kd,
            'sample_rate': self._sample_rate,
            'integral': self._integral,
            'integral_limit': self._integral_limit,
            'integral_saturated': abs(self._integral) >= self._integral_limit,
            'reverse_output': self._reverse_output,
            'last_p': self.last_p,
            'last_i': self.last_i,
            'last_d': self.last_d
        }
