from typing import Dict, Optional

from app.client.dom import ModalDialog, Trigger


class ModalController:
    """
    Open/close lifecycle for one modal dialog.

    A modal built with a ``role_field`` (the career application dialog)
    prefills that field from the trigger's position card on open and clears
    it when opened from anywhere else.
    """

    def __init__(self, dialog: ModalDialog, role_field: Optional[Dict[str, str]] = None, role_key: str = "role"):
        self.dialog = dialog
        self.role_field = role_field
        self.role_key = role_key

    @property
    def is_open(self) -> bool:
        return self.dialog.active

    def open(self, trigger: Optional[Trigger] = None) -> None:
        self.dialog.active = True
        if self.role_field is not None:
            if trigger is not None and trigger.position_title:
                self.role_field[self.role_key] = trigger.position_title.strip()
            else:
                self.role_field[self.role_key] = ""

    def close(self) -> None:
        self.dialog.active = False

    def handle_window_click(self, target: object) -> None:
        """Close when the click landed on the backdrop, not on the dialog content."""
        if target is self.dialog:
            self.close()
