"""Version information for AI Studio SDK"""

__version__ = "0.1.0"
