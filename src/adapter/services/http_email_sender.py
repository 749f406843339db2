"""HTTP Email Sender Implementation

Delivers notification emails through an HTTP mail API using httpx with
timeout and retry logic.
"""
import asyncio
import logging
import httpx
from typing import Optional
from src.app.services.email_sender import (
    EmailSender,
    EmailDeliveryError,
    EmailServiceUnavailable,
)

logger = logging.getLogger(__name__)


class HttpEmailSender(EmailSender):
    """
    HTTP implementation of EmailSender using httpx.

    Features:
    - Per-request timeout
    - Exponential backoff retry on network errors: 1s, 2s, 4s
    - 4xx -> EmailDeliveryError, 5xx/timeout -> EmailServiceUnavailable
    """

    def __init__(
        self,
        base_url: str,
        sender: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        max_retries: int = 3,
    ):
        """
        Initialize HTTP email sender.

        Args:
            base_url: Base URL of the mail API (e.g., "http://mailer:8025")
            sender: From address, e.g. "Zuvomo <noreply@zuvomo.com>"
            api_key: Optional bearer token for the mail API
            timeout: Request timeout in seconds (default: 10.0)
            max_retries: Maximum retry attempts (default: 3)
        """
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self.timeout = timeout
        self.max_retries = max_retries
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else None
        self.client = httpx.AsyncClient(timeout=timeout, headers=headers)

    async def _retry_request(self, method: str, url: str, **kwargs):
        """Execute HTTP request with exponential backoff retry"""
        for attempt in range(self.max_retries):
            try:
                return await self.client.request(method, url, **kwargs)
            except (httpx.TimeoutException, httpx.ConnectError, httpx.ReadError) as e:
                if attempt < self.max_retries - 1:
                    delay = 2 ** attempt
                    logger.warning(
                        f"Email request failed (attempt {attempt + 1}/{self.max_retries}), "
                        f"retrying in {delay}s: {e}"
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Email request failed after {self.max_retries} attempts: {e}")

        raise EmailServiceUnavailable(
            f"Email service unavailable after {self.max_retries} attempts"
        )

    async def send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        """POST the message to /send"""
        payload = {
            "from": self.sender,
            "to": [{"email": to_email, "name": to_name}],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }

        response = await self._retry_request("POST", f"{self.base_url}/send", json=payload)

        if response.status_code >= 500:
            logger.error(f"Email service error (5xx): {response.status_code}")
            raise EmailServiceUnavailable(f"Email service returned {response.status_code}")

        if 400 <= response.status_code < 500:
            try:
                error_message = response.json().get("error", {}).get("message", "Client error")
            except ValueError:
                error_message = response.text or "Client error"
            logger.error(f"Email rejected for {to_email}: {error_message}")
            raise EmailDeliveryError(error_message, status_code=response.status_code)

        logger.info(f"Email '{subject}' accepted for {to_email}")

    async def aclose(self) -> None:
        await self.client.aclose()


class LoggingEmailSender(EmailSender):
    """
    Email sender for development and tests.

    Logs the message instead of delivering it.
    """

    async def send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        logger.info(f"[LoggingEmailSender] Would send '{subject}' to {to_email}")
