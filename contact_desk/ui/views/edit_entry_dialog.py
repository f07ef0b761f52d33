import logging
from collections.abc import Callable

import flet as ft

from contact_desk.adapters.http.entries_client import ApiError
from contact_desk.components.entries import validate_edit_form
from contact_desk.domain.entities import Entry
from contact_desk.ui.context import ClientContext
from contact_desk.ui.layout import notify

logger = logging.getLogger(__name__)


class EditEntryDialog(ft.AlertDialog):  # type: ignore
    """
    Admin edit dialog. Applies the stricter edit-form checks, then sends
    the entry's version so a concurrent change is reported instead of lost.
    """

    def __init__(
        self,
        page: ft.Page,
        ctx: ClientContext,
        entry: Entry,
        on_saved: Callable[[Entry], None],
    ) -> None:
        self.host_page = page
        self.ctx = ctx
        self.entry = entry
        self.on_saved = on_saved

        self.name = ft.TextField(label="Full Name", value=entry.name)
        self.mobile = ft.TextField(label="Mobile Number", value=entry.mobile)
        self.address = ft.TextField(
            label="Address", value=entry.address, multiline=True, min_lines=2
        )
        self.fields = {"name": self.name, "mobile": self.mobile, "address": self.address}

        super().__init__(
            modal=True,
            title=ft.Text("Edit Person"),
            content=ft.Column([self.name, self.mobile, self.address], tight=True, width=400),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: self.close()),
                ft.ElevatedButton("Save Changes", on_click=self.save_click),
            ],
        )

    def open_dialog(self) -> None:
        self.host_page.open(self)

    def close(self) -> None:
        self.host_page.close(self)

    def save_click(self, e: ft.ControlEvent) -> None:
        for field in self.fields.values():
            field.error_text = None

        digits = self.ctx.rules.entries.mobile_digits
        errors = validate_edit_form(
            self.name.value,
            self.mobile.value,
            self.address.value,
            self.ctx.rules.entries.edit_form,
            min_digits=digits.min,
            max_digits=digits.max,
        )
        if errors:
            for err in errors:
                if err.field in self.fields:
                    self.fields[err.field].error_text = err.message
            self.host_page.update()
            return

        try:
            updated = self.ctx.api.update_entry(
                self.entry.id,
                name=(self.name.value or "").strip(),
                mobile=(self.mobile.value or "").strip(),
                address=(self.address.value or "").strip(),
                version=self.entry.version,
            )
        except ApiError as err:
            logger.warning("Update of entry %s failed: %s", self.entry.id, err.message)
            notify(self.host_page, err.message or "Failed to update person information", error=True)
            return

        self.close()
        notify(self.host_page, "Person information updated successfully!")
        self.on_saved(updated)
