"""
Module: config
Description: Package initialization for sender configuration.
"""

from .settings import DEFAULT_RETRIES, FCM_SEND_ENDPOINT, GCM_SEND_ENDPOINT, Settings

__all__ = [
    "DEFAULT_RETRIES",
    "FCM_SEND_ENDPOINT",
    "GCM_SEND_ENDPOINT",
    "Settings",
]
