"""CTC Calc - compensation (CTC) breakdown and assignment tools."""

__version__ = "0.1.0"
