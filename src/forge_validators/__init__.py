"""Independent recomputation of forge decision-tree and real-options results."""

__version__ = "1.0.0"
