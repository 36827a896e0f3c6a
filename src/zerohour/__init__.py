"""ZeroHour — business-impact prioritization for SAST findings."""

__version__ = "1.0.0"
