"""Construction-project planning engine: scheduling and worker assignment."""

__version__ = "0.1.0"
