"""
Client-side submission flow for the website forms.

One ``FormController`` is bound to each form. ``submit()`` posts the form
as multipart data, reads the ``{status, message}`` envelope and renders
the outcome into the form's status region:

    idle -> sending -> success | error -> idle

The submit button is disabled while sending and restored before
``submit()`` returns, whatever the outcome. A successful career application
additionally closes the career modal and clears the status region after
``close_delay`` seconds.
"""

import asyncio
import html
import json
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urljoin

import httpx

from app.client.dom import FormElement, ModalDialog
from app.client.endpoints import EndpointResolver, with_cache_buster

logger = logging.getLogger(__name__)

CAREER_FORM_ID = "careerForm"
CAREER_MODAL_ID = "careerModal"
CAREER_CLOSE_DELAY = 2.0

SENDING_LABEL = 'Sending... <i class="fas fa-spinner fa-spin"></i>'


class FormState(str, Enum):
    idle = "idle"
    sending = "sending"
    success = "success"
    error = "error"


class Outcome(str, Enum):
    success = "success"
    server_error = "server_error"
    http_error = "http_error"
    protocol_mismatch = "protocol_mismatch"
    network_failure = "network_failure"


@dataclass
class SubmissionResult:
    outcome: Outcome
    status_html: str
    http_status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.success


def success_html(message: str) -> str:
    return f'<span style="color: green;"><i class="fas fa-check-circle"></i> {html.escape(message)}</span>'


def error_html(message: str, icon: bool = False) -> str:
    prefix = '<i class="fas fa-exclamation-circle"></i> ' if icon else ""
    return f'<span style="color: red;">{prefix}{message}</span>'


def http_error_message(status_code: int) -> str:
    if status_code == 405:
        return "Error 405: Method Not Allowed. <br>Static servers cannot send emails. Run the mail backend."
    if status_code == 404:
        return "Error 404: contact endpoint not found. Check file path."
    return f"Server Error ({status_code}). Please try again later."


def looks_like_html(text: str) -> bool:
    head = text.strip().lower()
    return head.startswith("<!doctype") or head.startswith("<html")


class FormController:
    """Drives one form through a submission round trip."""

    def __init__(
        self,
        form: FormElement,
        endpoint: EndpointResolver,
        client: httpx.AsyncClient,
        page_url: Optional[str] = None,
        modal: Optional[ModalDialog] = None,
        close_delay: float = CAREER_CLOSE_DELAY,
        clock: Callable[[], float] = time.time,
    ):
        self.form = form
        self.endpoint = endpoint
        self.client = client
        self.page_url = page_url
        self.modal = modal
        self.close_delay = close_delay
        self.clock = clock
        self.state = FormState.idle
        self.pending_close: Optional[asyncio.TimerHandle] = None

    @property
    def is_career_form(self) -> bool:
        return self.form.id == CAREER_FORM_ID

    def request_url(self) -> str:
        url = self.endpoint.resolve(self.form)
        if self.page_url:
            url = urljoin(self.page_url, url)
        return with_cache_buster(url, int(self.clock() * 1000))

    def multipart_fields(self) -> List[Tuple[str, Tuple]]:
        """
        Every form field as a multipart part.

        Text fields are parts without a filename, so the body is multipart
        even when the form carries no file.
        """
        parts: List[Tuple[str, Tuple]] = [
            (name, (None, value)) for name, value in self.form.fields.items()
        ]
        parts.extend(self.form.files.items())
        return parts

    async def submit(self) -> SubmissionResult:
        status_region = self.form.ensure_status_region()
        button = self.form.submit_button
        original_label = button.label if button else "Submit"

        if button:
            button.label = SENDING_LABEL
            button.disabled = True
        self.state = FormState.sending

        try:
            result = await self._send()
        finally:
            if button:
                button.label = original_label
                button.disabled = False

        status_region.html = result.status_html
        self.state = FormState.success if result.ok else FormState.error

        if result.ok:
            self.form.reset()
            if self.is_career_form:
                self._schedule_close()

        self.state = FormState.idle
        return result

    async def _send(self) -> SubmissionResult:
        try:
            response = await self.client.post(
                self.request_url(),
                headers={"Accept": "application/json"},
                files=self.multipart_fields(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Form Submission Error: {e!r}")
            return SubmissionResult(
                Outcome.network_failure,
                error_html("Network Error. Please try again."),
            )

        return self.interpret(response)

    def interpret(self, response: httpx.Response) -> SubmissionResult:
        """Map an HTTP response onto a submission outcome."""
        status = response.status_code

        if not response.is_success:
            return SubmissionResult(Outcome.http_error, error_html(http_error_message(status)), status)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            text = response.text
            logger.error(f"Expected JSON, but received: {text[:500]}")
            if looks_like_html(text):
                message = "Error: Server returned HTML instead of JSON. <br>Ensure the mail backend is running."
            else:
                message = "Error: Server returned unexpected format."
            return SubmissionResult(Outcome.protocol_mismatch, error_html(message), status)

        try:
            envelope = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"JSON Parse Error despite JSON header: {e}")
            return SubmissionResult(
                Outcome.protocol_mismatch,
                error_html("Error: Server sent invalid JSON."),
                status,
            )

        if not isinstance(envelope, dict):
            return SubmissionResult(
                Outcome.protocol_mismatch,
                error_html("Error: Server returned unexpected format."),
                status,
            )

        message = str(envelope.get("message", ""))
        if envelope.get("status") == "success":
            return SubmissionResult(Outcome.success, success_html(message), status)
        return SubmissionResult(Outcome.server_error, error_html(html.escape(message), icon=True), status)

    def _schedule_close(self) -> None:
        loop = asyncio.get_running_loop()
        if self.pending_close is not None:
            self.pending_close.cancel()
        self.pending_close = loop.call_later(self.close_delay, self._close_after_success)

    def _close_after_success(self) -> None:
        self.pending_close = None
        if self.modal is not None:
            self.modal.active = False
        if self.form.status_region is not None:
            self.form.status_region.clear()


def bind_forms(
    forms: Iterable[FormElement],
    endpoint: EndpointResolver,
    client: httpx.AsyncClient,
    page_url: Optional[str] = None,
    modals: Optional[Dict[str, ModalDialog]] = None,
) -> List[FormController]:
    """
    Build exactly one controller per form.

    The career form is handed the career modal so a successful application
    can close it.
    """
    modals = modals or {}
    controllers: Dict[int, FormController] = {}
    for form in forms:
        if id(form) in controllers:
            continue
        modal = modals.get(CAREER_MODAL_ID) if form.id == CAREER_FORM_ID else None
        controllers[id(form)] = FormController(
            form, endpoint, client, page_url=page_url, modal=modal,
        )
    return list(controllers.values())
