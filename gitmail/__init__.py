"""gitmail: turn emails into ready-to-run issue tracker commands."""

__version__ = "0.1.0"
