"""Children's ministry check-in service."""

__version__ = "1.0.0"
