"""Social Network Explorer: traced shortest paths and friend loops."""

__version__ = "2.0.0"
