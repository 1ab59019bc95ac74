"""VirtualBook - simulated sports-betting market driven by a virtual clock."""

__version__ = "0.1.0"
