"""Worker module - Background job processing.

Contains background workers for:
- NotificationWorker: Delivers queued notification emails
"""
from .notification_worker import NotificationWorker, run_notification_worker

__all__ = ["NotificationWorker", "run_notification_worker"]
