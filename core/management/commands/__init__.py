"""Expose command modules for easier testing.

Nur die weiterhin gültigen Commands werden hier importiert.
"""

from . import seed_initial_data  # noqa: F401
