"""Schedule named async tasks, record them in a pluggable store and run them when due."""

__version__ = "0.1.0"