"""Player score streams: publish, subscribe and rank on Somnia data streams."""

__version__ = "1.0.0"
