"""
Tests for resolving the URL a form posts to
"""
import pytest

from app.client.dom import FormElement
from app.client.endpoints import (
    DEFAULT_CONTACT_ENDPOINT,
    FixedEndpoint,
    FormActionEndpoint,
    PageRelativeEndpoint,
    with_cache_buster,
)


def _form(action_attribute=None, action="http://site.test/index.html"):
    return FormElement(id="contactForm", action_attribute=action_attribute, action=action)


def test_fixed_endpoint_ignores_form_action():
    endpoint = FixedEndpoint()

    assert endpoint.resolve(_form("somewhere/else.php")) == DEFAULT_CONTACT_ENDPOINT == "/backend/contact.php"


def test_form_action_endpoint_uses_absolute_action():
    form = _form("backend/contact.php", action="http://site.test/backend/contact.php")

    assert FormActionEndpoint().resolve(form) == "http://site.test/backend/contact.php"


class TestPageRelativeEndpoint:
    @pytest.mark.parametrize(
        "action, expected",
        [
            ("contact.php", "../backend/contact.php"),
            ("backend/contact.php", "../backend/contact.php"),
            ("assets/php/send.php", "../assets/php/send.php"),
            ("/backend/contact.php", "/backend/contact.php"),
            ("https://mail.site.test/contact.php", "https://mail.site.test/contact.php"),
        ],
    )
    def test_pages_directory_rewrites(self, action, expected):
        endpoint = PageRelativeEndpoint("/pages/careers.html")

        assert endpoint.in_pages_dir
        assert endpoint.resolve(_form(action)) == expected

    @pytest.mark.parametrize("action", ["contact.php", "backend/contact.php", "assets/php/send.php"])
    def test_root_pages_keep_action(self, action):
        endpoint = PageRelativeEndpoint("/index.html")

        assert not endpoint.in_pages_dir
        assert endpoint.resolve(_form(action)) == action

    @pytest.mark.parametrize("page_path", ["/index.html", "/pages/contact.html"])
    def test_missing_action_falls_back_to_form_action(self, page_path):
        form = _form(None, action="http://site.test/pages/contact.html")

        assert PageRelativeEndpoint(page_path).resolve(form) == "http://site.test/pages/contact.html"

    def test_empty_action_falls_back_to_form_action(self):
        form = _form("", action="http://site.test/pages/contact.html")

        assert PageRelativeEndpoint("/pages/contact.html").resolve(form) == "http://site.test/pages/contact.html"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("/backend/contact.php", "/backend/contact.php?t=1700000000000"),
        ("/backend/contact.php?lang=en", "/backend/contact.php?lang=en&t=1700000000000"),
        ("../backend/contact.php", "../backend/contact.php?t=1700000000000"),
    ],
)
def test_cache_buster_always_appended(url, expected):
    assert with_cache_buster(url, 1700000000000) == expected
