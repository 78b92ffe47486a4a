"""Pathly - goal tracking with recurring goals, streaks, points and rewards."""

__version__ = "0.1.0"
