"""Admin service for the location plugin's City resource."""

__version__ = "1.0.0"
