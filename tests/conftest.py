"""Pytest configuration and shared fixtures"""
import os
from email.message import Message
from typing import Generator, List, Optional

# Settings are read at import time, so the environment is fixed up first
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SMTP_HOST"] = "smtp.relay.test"
os.environ["SMTP_USERNAME"] = ""
os.environ["MAIL_TO"] = "inbox@dilshaj.dev"

import pytest
from fastapi.testclient import TestClient


class RecordingMailer:
    """Stands in for the SMTP relay and keeps every message it is given."""

    def __init__(self):
        self.sent: List[Message] = []

    async def send_message(self, message: Message) -> None:
        self.sent.append(message)


def html_part(message: Message) -> Optional[str]:
    for part in message.walk():
        if part.get_content_type() == "text/html":
            return part.get_payload(decode=True).decode("utf-8")
    return None


def text_part(message: Message) -> Optional[str]:
    for part in message.walk():
        if part.get_content_type() == "text/plain":
            return part.get_payload(decode=True).decode("utf-8")
    return None


def attachments(message: Message) -> list:
    return [part for part in message.walk() if part.get_filename()]


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def api_app(mailer):
    from app.main import app as fastapi_app
    from app.services.SmtpMailer import get_mailer

    fastapi_app.dependency_overrides[get_mailer] = lambda: mailer
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(api_app) -> Generator[TestClient, None, None]:
    with TestClient(api_app) as test_client:
        yield test_client
