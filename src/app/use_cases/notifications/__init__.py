from src.app.use_cases.notifications.process_notification_job_use_case import (
    ProcessNotificationJobUseCase,
)
from src.app.use_cases.notifications.reclaim_stale_notification_jobs_use_case import (
    ReclaimStaleNotificationJobsUseCase,
)

__all__ = ["ProcessNotificationJobUseCase", "ReclaimStaleNotificationJobsUseCase"]
