"""Hardware device configuration model for the POS back office."""

__version__ = "0.1.0"
