"""Process Notification Job Use Case

Background job processor that renders and delivers one queued
notification email.
"""
import logging
from libs.result import Result, Error, Return
from src.app.services.email_sender import EmailDeliveryError, EmailSender, EmailServiceUnavailable
from src.app.services.email_templates import PlatformSettings, render_notification
from src.app.services.unit_of_work import UnitOfWork
from src.domain.enums import NotificationJobStatus

logger = logging.getLogger(__name__)


class ProcessNotificationJobUseCase:
    """
    Use case: Process Notification Job

    1. Claims a pending job (pending -> processing)
    2. Renders the template and sends the email
    3. Marks the job sent, schedules a retry, or fails it for good
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender, settings: PlatformSettings):
        self.uow = uow
        self.email_sender = email_sender
        self.settings = settings

    async def execute(self, job_id: str) -> Result[bool]:
        """
        Process a notification job

        Returns:
            Result[bool]: True if the email was sent
        """
        async with self.uow:
            job = await self.uow.notification_jobs.get_by_id(job_id)
            if not job:
                logger.error(f"[ProcessNotification] Job not found: {job_id}")
                return Return.err(
                    Error(code="NOTIFICATION_JOB_NOT_FOUND", message="Notification job not found")
                )

            if job.status != NotificationJobStatus.pending:
                logger.info(
                    f"[ProcessNotification] Job {job_id} is not pending, status: {job.status}"
                )
                return Return.ok(False)

            job.start_processing()
            await self.uow.notification_jobs.update(job)
            await self.uow.commit()

            kind = job.kind
            recipient_email = job.recipient_email
            recipient_name = job.recipient_name
            context = dict(job.context or {})

        error_message = None
        retryable = False
        try:
            rendered = render_notification(kind, context, self.settings)
            await self.email_sender.send(
                to_email=recipient_email,
                to_name=recipient_name,
                subject=rendered.subject,
                html_body=rendered.html_body,
                text_body=rendered.text_body,
            )
        except KeyError:
            error_message = f"No template for notification kind '{kind}'"
        except EmailDeliveryError as e:
            error_message = e.message
        except EmailServiceUnavailable as e:
            error_message = e.message
            retryable = True
        except Exception as e:
            # Unknown outcome; the job must not stay in processing
            logger.exception(f"[ProcessNotification] Unexpected error sending job {job_id}")
            error_message = f"Unexpected error: {e}"
            retryable = True

        async with self.uow:
            job = await self.uow.notification_jobs.get_by_id(job_id)

            if error_message is None:
                job.complete()
                logger.info(f"[ProcessNotification] Sent {kind} email for job {job_id}")
            elif retryable and job.can_retry():
                job.increment_retry(error_message)
                logger.warning(
                    f"[ProcessNotification] Job {job_id} scheduled for retry. "
                    f"Attempt {job.retry_count}/{job.max_retries}: {error_message}"
                )
            else:
                job.fail(error_message)
                logger.error(f"[ProcessNotification] Job {job_id} failed: {error_message}")

            await self.uow.notification_jobs.update(job)
            await self.uow.commit()

        return Return.ok(error_message is None)
