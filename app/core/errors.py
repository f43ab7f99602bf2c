"""Errors raised while handling a contact form submission.

Each error maps onto the ``{status: "error", message}`` envelope the website
forms understand. Only ``MethodNotAllowed`` changes the HTTP status code;
every other handled outcome is answered with 200.
"""

from app.constants.constants import (
    INVALID_EMAIL_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
)


class ContactFormError(Exception):
    """Base class for submission errors surfaced to the visitor."""

    status_code = 200

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> dict:
        return {"status": "error", "message": self.message}


class MethodNotAllowed(ContactFormError):
    status_code = 405

    def __init__(self, message: str = METHOD_NOT_ALLOWED_MESSAGE):
        super().__init__(message)


class ValidationError(ContactFormError):
    """Missing or malformed submitter email."""

    def __init__(self, message: str = INVALID_EMAIL_MESSAGE):
        super().__init__(message)


class AttachmentRejected(ContactFormError):
    """Resume upload with a disallowed extension or over the size limit."""


class TransportError(ContactFormError):
    """The SMTP relay refused or failed to deliver the message."""

    def __init__(self, detail: str):
        super().__init__(f"Mailer Error: {detail}")
        self.detail = detail
