import logging

import flet as ft

from contact_desk.adapters.http.entries_client import ApiError
from contact_desk.components.entries import validate_entry_form
from contact_desk.ui.context import ClientContext
from contact_desk.ui.layout import notify
from contact_desk.ui.state import AppState

logger = logging.getLogger(__name__)


class EntryFormView(ft.Column):  # type: ignore
    """New entry form. Submit validates locally, saves through the API and clears the form."""

    def __init__(self, page: ft.Page, ctx: ClientContext, state: AppState) -> None:
        super().__init__(spacing=12, width=480)
        self.page = page
        self.ctx = ctx
        self.state = state

        self.name = ft.TextField(label="Full Name", hint_text="Enter your full name")
        self.mobile = ft.TextField(
            label="Mobile Number",
            hint_text="Enter mobile number",
            keyboard_type=ft.KeyboardType.PHONE,
        )
        self.address = ft.TextField(
            label="Address",
            hint_text="Enter your complete address",
            multiline=True,
            min_lines=3,
        )
        self.fields = {"name": self.name, "mobile": self.mobile, "address": self.address}
        self.submit_button = ft.ElevatedButton("Submit", on_click=self.submit_click)

        self.controls = [
            ft.Text("New Entry", size=24, weight=ft.FontWeight.BOLD),
            self.name,
            self.mobile,
            self.address,
            ft.Row(
                [
                    ft.OutlinedButton("Reset", on_click=self.reset_click),
                    self.submit_button,
                ],
                alignment=ft.MainAxisAlignment.END,
            ),
        ]

    def _clear_errors(self) -> None:
        for field in self.fields.values():
            field.error_text = None

    def _clear(self) -> None:
        for field in self.fields.values():
            field.value = ""
        self._clear_errors()

    def reset_click(self, e: ft.ControlEvent) -> None:
        self._clear()
        self.update()

    def submit_click(self, e: ft.ControlEvent) -> None:
        self._clear_errors()
        digits = self.ctx.rules.entries.mobile_digits
        errors = validate_entry_form(
            self.name.value,
            self.mobile.value,
            self.address.value,
            min_digits=digits.min,
            max_digits=digits.max,
        )
        if errors:
            for err in errors:
                if err.field in self.fields:
                    self.fields[err.field].error_text = err.message
            self.update()
            return

        self.submit_button.disabled = True
        self.update()
        try:
            entry = self.ctx.api.create_entry(
                name=self.name.value or "",
                mobile=self.mobile.value or "",
                address=self.address.value or "",
            )
        except ApiError as err:
            logger.warning("Save entry failed: %s", err.message)
            notify(self.page, f"Failed to save entry: {err.message}", error=True)
            return
        finally:
            self.submit_button.disabled = False

        logger.info("Entry %s saved", entry.id)
        self._clear()
        self.update()
        notify(self.page, "Entry saved successfully!")
