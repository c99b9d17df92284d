"""
TSEA Learning Platform.
"""

__version__ = "1.0.0"
