"""Countdown: menu-bar focus countdown with session history."""

__version__ = "0.1.0"
