"""Shop catalog visibility and collection membership core."""

__version__ = "0.1.0"
