"""clipnest - identity, session and relationship-graph backend for video sharing."""

__version__ = "0.1.0"
