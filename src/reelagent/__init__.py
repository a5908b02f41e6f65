"""ReelAgent — compile video edit operations into a render timeline and plan."""

__version__ = "0.1.0"
