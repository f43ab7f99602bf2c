from typing import Literal, Mapping, Optional
from pydantic import BaseModel, EmailStr, field_validator

from app.constants.constants import DEFAULT_PHONE, DEFAULT_SUBJECT


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class ContactSubmission(BaseModel):
    """Trimmed fields of one website form submission."""
    name: str = ""
    email: EmailStr
    message: str = ""
    form_type: str = ""
    phone: str = DEFAULT_PHONE
    subject: str = DEFAULT_SUBJECT
    specialization: str = ""
    role: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_ascii(cls, v):
        # the relay gets plain RFC 5321 addresses, no SMTPUTF8
        if isinstance(v, str) and not v.isascii():
            raise ValueError("email address must be ASCII")
        return v

    @classmethod
    def from_form(cls, fields: Mapping[str, Optional[str]]) -> "ContactSubmission":
        """
        Build a submission from raw form fields.

        Absent or blank phone/subject fall back to their placeholders.
        Raises pydantic.ValidationError when the email is missing or malformed.
        """
        return cls(
            name=_clean(fields.get("name")),
            email=_clean(fields.get("email")),
            message=_clean(fields.get("message")),
            form_type=_clean(fields.get("form_type")),
            phone=_clean(fields.get("phone")) or DEFAULT_PHONE,
            subject=_clean(fields.get("subject")) or DEFAULT_SUBJECT,
            specialization=_clean(fields.get("specialization")),
            role=_clean(fields.get("role")),
        )


class StatusEnvelope(BaseModel):
    """JSON body returned to the website forms."""
    status: Literal["success", "error"]
    message: str
