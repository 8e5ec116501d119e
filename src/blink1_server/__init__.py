"""HTTP server for the blink(1) USB notification light"""

__version__ = "1.0.0"
