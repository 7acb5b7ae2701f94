"""Real-time differential-drive robot simulation with reference-model control."""

__version__ = "0.1.0"
__all__ = ["app", "dynamics", "integral", "matrix", "monitors", "tasks"]