"""
Utility functions and helpers.
"""
from .notification_manager import (
    NotificationManager,
    NotificationType,
    notification_manager  # Global instance
)

__all__ = [
    'NotificationManager',
    'NotificationType',
    'notification_manager'
]
