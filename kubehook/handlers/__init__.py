"""
Notification handlers.
"""

from .base import Handler, DefaultHandler

__all__ = ["Handler", "DefaultHandler"]
