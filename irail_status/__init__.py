"""Terminal client for the iRail Belgian railway API."""

__version__ = "0.1.0"
