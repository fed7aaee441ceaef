"""
Mood Tracker - the storage backend of a desktop mood-tracking application.

This package persists the user's current mood in a per-user data file and
serves it to the GUI frontend over a small local HTTP API.
"""

__version__ = "0.1.0"
