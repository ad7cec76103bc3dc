"""
UniVAL - Faculty scheduling and evaluation portal (desktop client).
"""

__version__ = "1.0.0"
