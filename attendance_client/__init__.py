"""Client-side state and API access for the attendance management system."""

__version__ = "0.1.0"
