"""Devil's Advocate agent exposed over the A2A protocol."""

__version__ = "0.1.0"
