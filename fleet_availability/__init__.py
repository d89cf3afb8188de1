"""Resource availability and conflict detection for vendor fleets."""

__version__ = "0.1.0"
