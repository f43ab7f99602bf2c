"""API endpoint forwarding website form submissions to the site inbox by email."""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from app.constants.constants import SUCCESS_MESSAGE
from app.core.config import settings
from app.core.errors import ContactFormError, ValidationError
from app.core.limiter import limiter
from app.schemas.contactSchema import ContactSubmission, StatusEnvelope
from app.services.ContactEmailComposer import build_message, resolve_email_template
from app.services.SmtpMailer import SmtpMailer, get_mailer
from app.utils.uploads.val_upload_resume import validate_resume

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/backend",
    tags=["contact"]
)

TEXT_FIELDS = ("name", "email", "message", "form_type", "phone", "subject", "specialization", "role")


def envelope(status: str, message: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=StatusEnvelope(status=status, message=message).model_dump(),
    )


@router.post("/contact.php", response_model=StatusEnvelope)
@limiter.limit(settings.CONTACT_RATE_LIMIT)
async def submit_contact_form(
    request: Request,
    mailer: SmtpMailer = Depends(get_mailer),
):
    """
    Email a website form submission to the site inbox.

    Every handled outcome, including rejected input, is answered with 200
    and a {status, message} envelope. Email and attachment problems are
    reported before any mail is sent.
    """
    form = await request.form()
    fields = {
        key: value for key, value in form.items()
        if key in TEXT_FIELDS and isinstance(value, str)
    }

    try:
        try:
            submission = ContactSubmission.from_form(fields)
        except PydanticValidationError:
            logger.info(f"⚠️ Rejected submission with invalid email: {fields.get('email', '')!r}")
            raise ValidationError()

        template = resolve_email_template(submission.form_type, submission.name, submission.email)
        attachment = await validate_resume(form.get("resume"))
        message = build_message(submission, template, attachment)

        logger.info(f"✉️ Forwarding '{template.form_type}' submission from {submission.email}")
        await mailer.send_message(message)

    except ContactFormError as e:
        logger.info(f"⚠️ {type(e).__name__}: {e.message}")
        return envelope("error", e.message, e.status_code)
    finally:
        await form.close()

    return envelope("success", SUCCESS_MESSAGE)
