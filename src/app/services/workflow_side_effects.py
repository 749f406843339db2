"""Post-commit side effects of moderation actions.

A moderation transition is final once committed. Failures in the audit
log, notification queue or stats cache are logged and reported back to
the caller but never undo the transition.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from src.app.services.audit_service import AuditService
from src.app.services.notification_queue import NotificationQueue
from src.app.services.stats_cache import StatsCache
from src.domain.enums import NotificationKind

logger = logging.getLogger(__name__)


class SideEffectsReport(BaseModel):
    """What happened after the transition was committed"""

    notification_queued: bool = False
    audit_logged: bool = False
    stats_invalidated: bool = False
    failures: List[str] = Field(default_factory=list)


@dataclass
class NotificationRequest:
    kind: NotificationKind
    recipient_email: str
    recipient_name: Optional[str]
    resource_type: str
    resource_id: str
    context: Dict[str, Any] = field(default_factory=dict)


class WorkflowSideEffects:
    """Runs audit, notification and cache invalidation for a committed transition"""

    def __init__(
        self,
        audit_service: AuditService,
        notification_queue: NotificationQueue,
        stats_cache: StatsCache,
    ):
        self.audit_service = audit_service
        self.notification_queue = notification_queue
        self.stats_cache = stats_cache

    async def run(
        self,
        actor_id: str,
        event_type: str,
        resource_type: str,
        resource_id: str,
        metadata: Optional[Dict[str, Any]] = None,
        notification: Optional[NotificationRequest] = None,
    ) -> SideEffectsReport:
        report = SideEffectsReport()

        if notification is not None:
            try:
                job_id = await self.notification_queue.enqueue(
                    kind=notification.kind,
                    recipient_email=notification.recipient_email,
                    recipient_name=notification.recipient_name,
                    resource_type=notification.resource_type,
                    resource_id=notification.resource_id,
                    context=notification.context,
                )
                report.notification_queued = True
                logger.info(
                    f"[SideEffects] Queued {notification.kind.value} job {job_id} "
                    f"for {resource_type} {resource_id}"
                )
            except Exception as e:
                logger.warning(
                    f"[SideEffects] Failed to queue notification for {resource_type} "
                    f"{resource_id}: {type(e).__name__} - {str(e)}"
                )
                report.failures.append(f"notification: {str(e) or type(e).__name__}")

        try:
            await self.audit_service.log_event(
                event_type=event_type,
                actor_id=actor_id,
                resource_type=resource_type,
                resource_id=resource_id,
                metadata=metadata or {},
            )
            report.audit_logged = True
        except Exception as e:
            logger.warning(
                f"[SideEffects] Failed to record audit event {event_type} for "
                f"{resource_type} {resource_id}: {type(e).__name__} - {str(e)}"
            )
            report.failures.append(f"audit: {str(e) or type(e).__name__}")

        try:
            await self.stats_cache.invalidate()
            report.stats_invalidated = True
        except Exception as e:
            logger.warning(f"[SideEffects] Failed to invalidate stats cache: {str(e)}")
            report.failures.append(f"stats: {str(e) or type(e).__name__}")

        return report
