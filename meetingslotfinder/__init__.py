"""
Meeting Slot Finder - find free meeting times within a single day.
"""

__version__ = "0.1.0"
