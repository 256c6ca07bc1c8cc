from discrete_pid.feedback.pid import Controller, truncate_pos_or_neg

__version__ = "0.1.0"

__all__ = ["Controller", "truncate_pos_or_neg"]
