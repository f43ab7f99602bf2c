"""
Drives the client form controller against the real application
"""
import httpx
import pytest

from app.client.dom import FormElement, ModalDialog, SubmitButton, Trigger
from app.client.endpoints import FixedEndpoint, PageRelativeEndpoint
from app.client.form_controller import FormController, Outcome
from app.client.modals import ModalController


def _client(api_app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=api_app), base_url="http://site.test")


@pytest.mark.asyncio
async def test_contact_form_round_trip(api_app, mailer):
    form = FormElement(
        id="contactForm",
        fields={"name": "Jane", "email": "jane@x.com", "message": "Hi"},
        submit_button=SubmitButton(label="Send"),
    )

    async with _client(api_app) as client:
        result = await FormController(form, FixedEndpoint(), client).submit()

    assert result.outcome == Outcome.success
    assert "Thank you! Your message has been sent." in form.status_region.html
    assert form.fields["email"] == ""
    assert mailer.sent[0]["Subject"] == "Contact Form - Jane"


@pytest.mark.asyncio
async def test_invalid_email_shows_server_message(api_app, mailer):
    form = FormElement(id="contactForm", fields={"name": "Jane", "email": "jane@", "message": "Hi"})

    async with _client(api_app) as client:
        result = await FormController(form, FixedEndpoint(), client).submit()

    assert result.outcome == Outcome.server_error
    assert "Invalid email" in form.status_region.html
    assert form.fields["email"] == "jane@"
    assert mailer.sent == []


@pytest.mark.asyncio
async def test_career_application_from_pages_directory(api_app, mailer):
    form = FormElement(
        id="careerForm",
        action_attribute="contact.php",
        action="http://site.test/pages/contact.php",
        fields={"name": "Sam", "email": "sam@mail.com", "message": "Please consider me", "role": "",
                "form_type": "Internship Application"},
        submit_button=SubmitButton(label="Submit Application"),
    )
    modal = ModalController(ModalDialog(id="careerModal"), role_field=form.fields)
    modal.open(Trigger(id="apply-2", position_title="Data Analyst Intern"))
    form.files["resume"] = ("sam.docx", b"PK docx bytes", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")

    async with _client(api_app) as client:
        controller = FormController(
            form,
            PageRelativeEndpoint("/pages/careers.html"),
            client,
            page_url="http://site.test/pages/careers.html",
            modal=modal.dialog,
        )
        result = await controller.submit()
        controller.pending_close.cancel()

    assert result.outcome == Outcome.success
    assert form.submit_button.label == "Submit Application"
    [message] = mailer.sent
    assert message["Subject"] == "Internship Request - Sam"
    filenames = [part.get_filename() for part in message.walk() if part.get_filename()]
    assert filenames == ["sam.docx"]


@pytest.mark.asyncio
async def test_rejected_resume_keeps_form(api_app, mailer):
    form = FormElement(
        id="careerForm",
        fields={"name": "Sam", "email": "sam@mail.com", "message": "Hi"},
        files={"resume": ("sam.png", b"\x89PNG", "image/png")},
    )

    async with _client(api_app) as client:
        result = await FormController(form, FixedEndpoint(), client).submit()

    assert result.outcome == Outcome.server_error
    assert "Invalid file type" in form.status_region.html
    assert form.fields["name"] == "Sam"
    assert mailer.sent == []
