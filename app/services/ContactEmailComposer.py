"""Compose the notification email for a website form submission."""

import html
import logging
import re
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import NamedTuple, Optional

from app.constants.constants import (
    DEFAULT_FORM_TYPE,
    DEFAULT_REPLY_TO_NAME,
    DEFAULT_SUBJECT,
    EMAIL_TEMPLATES,
    FormType,
)
from app.core.config import settings
from app.schemas.contactSchema import ContactSubmission
from app.utils.uploads.val_upload_resume import ResumeAttachment

logger = logging.getLogger(__name__)

LABEL_CELL_STYLE = "background-color: #f2f2f2;"

_LINE_BREAKS = re.compile(r"[\r\n]+")


class ResolvedTemplate(NamedTuple):
    form_type: str
    heading: str
    subject: str


def resolve_email_template(form_type: str, name: str, email: str) -> ResolvedTemplate:
    """
    Map a form_type discriminator to the email heading and subject.

    Blank means the plain contact form. Unknown discriminators keep their
    own text as the heading and get "{form_type} - {name}" as the subject.
    """
    form_type = (form_type or "").strip() or DEFAULT_FORM_TYPE.value

    try:
        template = EMAIL_TEMPLATES[FormType(form_type)]
    except ValueError:
        return ResolvedTemplate(
            form_type=form_type,
            heading=html.escape(form_type),
            subject=f"{form_type} - {name}",
        )

    return ResolvedTemplate(
        form_type=form_type,
        heading=template.heading,
        subject=template.subject.format(name=name, email=email),
    )


def header_safe(value: str) -> str:
    """Fold line breaks into spaces so a submitter value cannot start a new header."""
    return _LINE_BREAKS.sub(" ", value).strip()


def _row(label: str, value: str, first: bool = False) -> str:
    style = f"{LABEL_CELL_STYLE} width: 30%;" if first else LABEL_CELL_STYLE
    return f"""
        <tr>
            <td style='{style}'><strong>{label}</strong></td>
            <td>{value}</td>
        </tr>"""


def render_html_body(submission: ContactSubmission, heading: str) -> str:
    """Render the HTML table sent to the site inbox. Submitter values are escaped."""
    esc = html.escape

    rows = [
        _row("Name", esc(submission.name), first=True),
        _row("Email", esc(submission.email)),
        _row("Phone", esc(submission.phone)),
    ]
    if submission.role:
        rows.append(_row("Role Applying For", esc(submission.role)))
    if submission.specialization:
        rows.append(_row("Specialization", esc(submission.specialization)))
    if submission.subject and submission.subject != DEFAULT_SUBJECT:
        rows.append(_row("Subject", esc(submission.subject)))

    message_html = "<br />\n".join(esc(submission.message).splitlines())
    rows.append(_row("Message", message_html))

    return f"""
    <h2>{heading}</h2>
    <table border='1' cellpadding='10' cellspacing='0' style='border-collapse: collapse; width: 100%; max-width: 600px;'>{"".join(rows)}
    </table>
    <br>
    <p><small>Sent from {esc(settings.SITE_NAME)} Website</small></p>
    """


def render_text_body(submission: ContactSubmission, subject: str) -> str:
    return (
        f"Subject: {subject}\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone}\n"
        f"Message: {submission.message}"
    )


def build_message(
    submission: ContactSubmission,
    template: ResolvedTemplate,
    attachment: Optional[ResumeAttachment] = None,
) -> MIMEMultipart:
    """Assemble the MIME message; replies go to the submitter."""
    msg = MIMEMultipart("mixed")
    msg["From"] = formataddr((settings.MAIL_FROM_NAME, settings.MAIL_FROM))
    msg["To"] = settings.MAIL_TO
    msg["Reply-To"] = formataddr((header_safe(submission.name) or DEFAULT_REPLY_TO_NAME, submission.email))
    msg["Subject"] = header_safe(template.subject)

    body = MIMEMultipart("alternative")
    body.attach(MIMEText(render_text_body(submission, template.subject), "plain", "utf-8"))
    body.attach(MIMEText(render_html_body(submission, template.heading), "html", "utf-8"))
    msg.attach(body)

    if attachment:
        maintype, _, subtype = attachment.content_type.partition("/")
        if maintype != "application" or not subtype:
            subtype = "octet-stream"
        part = MIMEApplication(attachment.content, _subtype=subtype)
        part.add_header("Content-Disposition", "attachment", filename=header_safe(attachment.filename))
        msg.attach(part)
        logger.info(f"📎 Attached resume {attachment.filename} ({len(attachment.content)} bytes)")

    return msg
