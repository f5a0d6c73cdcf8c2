"""Text messaging between processes over SIGUSR1 and SIGUSR2, with small text and buffer helpers."""

__version__ = "0.1.0"