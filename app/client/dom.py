"""
Headless models of the page elements the form controller drives.

Only the state the submission flow reads or writes is modelled: field
values, the submit button label and disabled flag, the status region
markup and the modal "active" flag.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# (filename, content, content_type)
FileField = Tuple[str, bytes, str]

STATUS_REGION_STYLE = {"margin-top": "10px", "font-size": "14px"}


@dataclass
class SubmitButton:
    label: str = "Submit"
    disabled: bool = False


@dataclass
class StatusRegion:
    html: str = ""
    css_class: str = "form-status"
    style: Dict[str, str] = field(default_factory=lambda: dict(STATUS_REGION_STYLE))

    def clear(self) -> None:
        self.html = ""


@dataclass
class FormElement:
    """A form on the page, its fields and its submission affordances."""
    id: str = ""
    action_attribute: Optional[str] = None
    action: str = ""
    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[str, FileField] = field(default_factory=dict)
    submit_button: Optional[SubmitButton] = None
    status_region: Optional[StatusRegion] = None

    def ensure_status_region(self) -> StatusRegion:
        """Return the status region under the form, creating it if absent."""
        if self.status_region is None:
            self.status_region = StatusRegion()
        return self.status_region

    def reset(self) -> None:
        for name in self.fields:
            self.fields[name] = ""
        self.files.clear()


@dataclass
class ModalDialog:
    id: str
    active: bool = False


@dataclass
class Trigger:
    """A control that opens a modal, optionally inside a position card."""
    id: str = ""
    position_title: Optional[str] = None
