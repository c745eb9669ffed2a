"""Version information for commit-msg."""

__version__ = "1.4.0"
