"""Decaying activity counter — exponentially weighted event-rate estimates."""

from activity.counter import Counter, add

__version__ = "0.1.0"

__all__ = ["Counter", "add", "__version__"]
