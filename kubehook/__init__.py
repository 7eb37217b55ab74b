"""
kubehook - relays cluster resource changes to an HTTP webhook.
"""

__version__ = "0.1.0"
