"""Resume review and payment workflow service."""

__version__ = "0.1.0"
