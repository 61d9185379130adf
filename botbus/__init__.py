"""botbus - slash-command parsing and dispatch for chat bots."""

__version__ = "1.0.0"
