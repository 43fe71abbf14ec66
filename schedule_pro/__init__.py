"""Schedule Pro - appointment scheduling API"""

__version__ = "1.0.0"
