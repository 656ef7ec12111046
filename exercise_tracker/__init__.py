"""Exercise Tracker — REST API for users and their logged exercises."""

__version__ = "1.0.0"
