"""Constants for form discriminators, email templates, upload rules and status envelope messages."""

from enum import Enum
from typing import Dict, NamedTuple


class FormType(str, Enum):
    """Enumeration of the form_type values the website forms submit."""

    contact_form = "Contact Form"
    value_courses_application = "Value Courses Application"
    internship_application = "Internship Application"
    project_idea = "Project Idea"
    project_idea_form = "Project Idea Form"
    home_page_contact_form = "Home Page Contact Form"
    collaboration_form = "Collaboration Form"
    latest_updates_request = "Latest Updates Request"
    newsletter_subscription = "Newsletter Subscription"


class EmailTemplate(NamedTuple):
    """Heading and subject template for one form type.

    ``subject`` is a ``str.format`` template receiving ``name`` and ``email``.
    """

    heading: str
    subject: str


DEFAULT_FORM_TYPE = FormType.contact_form

PROJECT_IDEA_TEMPLATE = EmailTemplate(
    heading="<b>The Project Idea Discussion from the User</b>",
    subject="The Project Idea Discussion - {name}",
)

LATEST_UPDATES_TEMPLATE = EmailTemplate(
    heading="Latest Updates Request",
    # newsletter forms usually carry no name
    subject="Latest Updates Request - {email}",
)

EMAIL_TEMPLATES: Dict[FormType, EmailTemplate] = {
    FormType.contact_form: EmailTemplate("Contact Form", "Contact Form - {name}"),
    FormType.value_courses_application: EmailTemplate(
        "Value Courses", "Value Courses Application - {name}"
    ),
    FormType.internship_application: EmailTemplate(
        "Internship Request", "Internship Request - {name}"
    ),
    FormType.project_idea: PROJECT_IDEA_TEMPLATE,
    FormType.project_idea_form: PROJECT_IDEA_TEMPLATE,
    FormType.home_page_contact_form: PROJECT_IDEA_TEMPLATE,
    FormType.collaboration_form: EmailTemplate(
        "Collaboration Form", "Collaboration Form - {name}"
    ),
    FormType.latest_updates_request: LATEST_UPDATES_TEMPLATE,
    FormType.newsletter_subscription: LATEST_UPDATES_TEMPLATE,
}

_missing_templates = set(FormType) - set(EMAIL_TEMPLATES)
if _missing_templates:
    raise RuntimeError(
        f"EMAIL_TEMPLATES has no entry for: {', '.join(sorted(t.value for t in _missing_templates))}"
    )

# Resume uploads
ALLOWED_RESUME_EXTENSIONS = {"pdf", "doc", "docx"}

# Submission field defaults
DEFAULT_PHONE = "Not provided"
DEFAULT_SUBJECT = "No Subject"
DEFAULT_REPLY_TO_NAME = "Website User"

# Status envelope messages
SUCCESS_MESSAGE = "Thank you! Your message has been sent."
METHOD_NOT_ALLOWED_MESSAGE = "Method Not Allowed"
INVALID_EMAIL_MESSAGE = "Invalid email"
INVALID_RESUME_TYPE_MESSAGE = "Invalid file type. Only PDF, DOC, DOCX allowed."
RESUME_TOO_LARGE_MESSAGE = "File is too large. Max {max_mb}MB."
RATE_LIMITED_MESSAGE = "Too many requests. Please try again later."
