"""Admin console for the kiosk ordering backend."""

__version__ = "0.1.0"
