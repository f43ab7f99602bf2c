"""Strategies for resolving the URL a form posts to."""

from typing import Optional, Protocol

from app.client.dom import FormElement

DEFAULT_CONTACT_ENDPOINT = "/backend/contact.php"


class EndpointResolver(Protocol):
    def resolve(self, form: FormElement) -> str:
        ...


class FixedEndpoint:
    """Every form posts to the same absolute path."""

    def __init__(self, url: str = DEFAULT_CONTACT_ENDPOINT):
        self.url = url

    def resolve(self, form: FormElement) -> str:
        return self.url


class FormActionEndpoint:
    """Posts to the form's resolved (absolute) action."""

    def resolve(self, form: FormElement) -> str:
        return form.action


class PageRelativeEndpoint:
    """
    Rewrites a form's raw action attribute for the directory the page lives in.

    Pages under ``/pages/`` sit one level below the site root, so
    root-relative actions get a ``../`` prefix there:

    - ``contact.php`` becomes ``../backend/contact.php``
    - ``assets/...`` and ``backend/...`` become ``../assets/...`` and ``../backend/...``

    Pages at the root use the attribute unchanged. A missing attribute falls
    back to the form's absolute action.
    """

    def __init__(self, page_path: str):
        self.page_path = page_path

    @property
    def in_pages_dir(self) -> bool:
        return "/pages/" in self.page_path

    def resolve(self, form: FormElement) -> str:
        action: Optional[str] = form.action_attribute

        if self.in_pages_dir and action:
            if action == "contact.php":
                action = "../backend/contact.php"
            elif action.startswith("assets/") or action.startswith("backend/"):
                action = "../" + action

        if not action:
            action = form.action
        return action


def with_cache_buster(url: str, timestamp_ms: int) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}t={timestamp_ms}"
