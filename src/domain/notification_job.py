"""NotificationJob Entity

Queue row for an email triggered by a moderation action. Rows are
written after the moderation transaction commits and drained by the
notification worker.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from sqlmodel import Field, Column
from sqlalchemy import JSON as SQLJSON
from src.domain.base import BaseModel, generate_uuid
from src.domain.enums import NotificationJobStatus, NotificationKind


class NotificationJob(BaseModel, table=True):
    """
    NotificationJob Entity

    Tracks delivery of one notification email with retry bookkeeping.
    """
    __tablename__ = "notification_jobs"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    kind: NotificationKind = Field(nullable=False)
    recipient_email: str = Field(max_length=255, nullable=False)
    recipient_name: Optional[str] = Field(default=None, max_length=255)

    # Moderated resource that triggered the notification
    resource_type: str = Field(max_length=50, nullable=False)
    resource_id: str = Field(index=True, nullable=False)

    # Template variables
    context: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(SQLJSON, nullable=False))

    # Job status
    status: NotificationJobStatus = Field(
        default=NotificationJobStatus.pending, nullable=False, index=True
    )
    error_message: Optional[str] = Field(default=None)

    # Retry tracking
    retry_count: int = Field(default=0)
    max_retries: int = Field(default=3)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    started_at: Optional[datetime] = Field(default=None)
    completed_at: Optional[datetime] = Field(default=None)

    class Config:
        use_enum_values = True

    def start_processing(self) -> None:
        """Mark job as processing"""
        self.status = NotificationJobStatus.processing
        self.started_at = datetime.utcnow()

    def complete(self) -> None:
        """Mark job as sent"""
        self.status = NotificationJobStatus.sent
        self.error_message = None
        self.completed_at = datetime.utcnow()

    def fail(self, error_message: str) -> None:
        """Mark job as permanently failed"""
        self.status = NotificationJobStatus.failed
        self.error_message = error_message
        self.completed_at = datetime.utcnow()

    def can_retry(self) -> bool:
        return self.retry_count < self.max_retries

    def release_stale(self, reason: str) -> None:
        """Recover a job whose worker died or hung mid-send"""
        if self.can_retry():
            self.increment_retry(reason)
        else:
            self.fail(reason)

    def increment_retry(self, error_message: Optional[str] = None) -> None:
        """Put the job back in the queue for another attempt"""
        self.retry_count += 1
        self.status = NotificationJobStatus.pending
        self.started_at = None
        self.completed_at = None
        self.error_message = error_message
