"""Source file discovery."""

from cnp.scanner.discovery import discover, is_excluded

__all__ = ["discover", "is_excluded"]
