"""Email Sender Interface

Abstract interface for outbound email delivery with custom exceptions.
"""
from abc import ABC, abstractmethod
from typing import Optional


class EmailError(Exception):
    """Base exception for all email delivery errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class EmailDeliveryError(EmailError):
    """The mail service refused the message (4xx); retrying will not help"""
    def __init__(self, message: str, status_code: Optional[int] = 400):
        super().__init__(message, status_code=status_code)


class EmailServiceUnavailable(EmailError):
    """The mail service is down or timed out (5xx or network error)"""
    def __init__(self, message: str = "Email service is currently unavailable"):
        super().__init__(message, status_code=503)


class EmailSender(ABC):
    """Delivers one rendered email"""

    @abstractmethod
    async def send(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: str,
    ) -> None:
        """
        Send an email.

        Raises:
            EmailDeliveryError: The message was rejected
            EmailServiceUnavailable: The service could not be reached
        """
        pass
