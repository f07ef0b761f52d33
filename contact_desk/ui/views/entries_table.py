import logging
from pathlib import Path

import flet as ft

from contact_desk.adapters.http.entries_client import ApiError
from contact_desk.components.filters import (
    EntryFilter,
    apply_filters,
    export_csv,
    export_filename,
    format_display_date,
    parse_date_bound,
    summarize,
)
from contact_desk.domain.entities import Entry
from contact_desk.ui.context import ClientContext
from contact_desk.ui.layout import notify
from contact_desk.ui.state import AppState
from contact_desk.ui.views.edit_entry_dialog import EditEntryDialog

logger = logging.getLogger(__name__)


class EntriesTableView(ft.Column):  # type: ignore
    """
    Admin dashboard: every entry, with text and date filters, CSV export,
    and per-row edit/delete.

    Filtering runs locally over ``state.entries``; only Refresh, edit and
    delete talk to the API.
    """

    def __init__(self, page: ft.Page, ctx: ClientContext, state: AppState) -> None:
        super().__init__(expand=True, spacing=12)
        self.page = page
        self.ctx = ctx
        self.state = state
        self.visible_entries: list[Entry] = []

        self.search = ft.TextField(
            label="Search",
            hint_text="Search by name, mobile number or address",
            prefix_icon=ft.Icons.SEARCH,
            expand=True,
            on_change=self.on_filter_change,
        )
        self.date_from = ft.TextField(
            label="From date", hint_text="YYYY-MM-DD", width=160, on_change=self.on_filter_change
        )
        self.date_to = ft.TextField(
            label="To date", hint_text="YYYY-MM-DD", width=160, on_change=self.on_filter_change
        )
        self.summary = ft.Text(color="onSurfaceVariant")
        self.table = ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text("Name")),
                ft.DataColumn(ft.Text("Mobile No")),
                ft.DataColumn(ft.Text("Address")),
                ft.DataColumn(ft.Text("Date Added")),
                ft.DataColumn(ft.Text("Actions")),
            ],
            rows=[],
        )

        self.file_picker = ft.FilePicker(on_result=self.on_export_result)
        page.overlay.append(self.file_picker)

        self.controls = [
            ft.Row(
                [
                    ft.Text("Dashboard", size=24, weight=ft.FontWeight.BOLD),
                    ft.IconButton(ft.Icons.REFRESH, tooltip="Refresh", on_click=self.on_refresh),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            ft.Row([self.search, self.date_from, self.date_to]),
            ft.Row(
                [
                    ft.OutlinedButton("Reset", icon=ft.Icons.RESTART_ALT, on_click=self.on_reset),
                    ft.OutlinedButton(
                        "Export CSV", icon=ft.Icons.DOWNLOAD, on_click=self.on_export_click
                    ),
                ]
            ),
            self.summary,
            ft.Divider(),
            ft.Column([self.table], scroll=ft.ScrollMode.AUTO, expand=True),
        ]

        self.load_entries()

    # --- Data ---

    def load_entries(self) -> None:
        try:
            self.state.entries = self.ctx.api.list_entries()
        except ApiError as err:
            logger.warning("Fetch entries failed: %s", err.message)
            self.state.entries = []
            notify(self.page, "Failed to load entries", error=True)
        self.refresh_view()

    def current_filter(self) -> EntryFilter:
        """Read the filter controls. An unparseable date is flagged and ignored."""
        bounds = []
        for field in (self.date_from, self.date_to):
            try:
                bounds.append(parse_date_bound(field.value))
                field.error_text = None
            except ValueError:
                bounds.append(None)
                field.error_text = "Use YYYY-MM-DD"
        return EntryFilter(term=self.search.value or "", date_from=bounds[0], date_to=bounds[1])

    def refresh_view(self) -> None:
        self.visible_entries = apply_filters(self.state.entries, self.current_filter())
        self.summary.value = summarize(self.visible_entries, len(self.state.entries))
        self.table.rows = [self._build_row(entry) for entry in self.visible_entries]
        if self.page is not None:
            self.page.update()

    def _build_row(self, entry: Entry) -> ft.DataRow:
        can_modify = self.ctx.policy.can_modify_entries(self.state.current_user)
        date_format = self.ctx.rules.export.date_format
        return ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(entry.name)),
                ft.DataCell(ft.Text(entry.mobile)),
                ft.DataCell(ft.Text(entry.address, max_lines=1, tooltip=entry.address)),
                ft.DataCell(ft.Text(format_display_date(entry.date_added, date_format))),
                ft.DataCell(
                    ft.Row(
                        [
                            ft.IconButton(
                                ft.Icons.EDIT,
                                data=entry.id,
                                tooltip="Edit",
                                on_click=self.on_edit_click,
                            ),
                            ft.IconButton(
                                ft.Icons.DELETE,
                                data=entry.id,
                                tooltip="Delete",
                                on_click=self.on_delete_click,
                            ),
                        ],
                        visible=can_modify,
                    )
                ),
            ]
        )

    def _find(self, entry_id: str) -> Entry | None:
        return next((e for e in self.state.entries if e.id == entry_id), None)

    # --- Handlers ---

    def on_filter_change(self, e: ft.ControlEvent) -> None:
        self.refresh_view()

    def on_refresh(self, e: ft.ControlEvent) -> None:
        self.load_entries()

    def on_reset(self, e: ft.ControlEvent) -> None:
        self.search.value = ""
        self.date_from.value = ""
        self.date_to.value = ""
        self.refresh_view()

    def on_edit_click(self, e: ft.ControlEvent) -> None:
        entry = self._find(e.control.data)
        if entry is None:
            return

        def on_saved(updated: Entry) -> None:
            self.state.entries = [
                updated if existing.id == updated.id else existing
                for existing in self.state.entries
            ]
            self.refresh_view()

        EditEntryDialog(self.page, self.ctx, entry, on_saved=on_saved).open_dialog()

    def on_delete_click(self, e: ft.ControlEvent) -> None:
        entry = self._find(e.control.data)
        if entry is None:
            return

        def confirm(_: ft.ControlEvent) -> None:
            self.page.close(dialog)
            try:
                self.ctx.api.delete_entry(entry.id)
            except ApiError as err:
                logger.warning("Delete of entry %s failed: %s", entry.id, err.message)
                notify(self.page, err.message or "Failed to delete entry", error=True)
                return
            self.state.entries = [x for x in self.state.entries if x.id != entry.id]
            self.refresh_view()
            notify(self.page, "Entry deleted")

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Delete entry?"),
            content=ft.Text(f"{entry.name} will be removed permanently."),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: self.page.close(dialog)),
                ft.TextButton("Delete", on_click=confirm),
            ],
        )
        self.page.open(dialog)

    def on_export_click(self, e: ft.ControlEvent) -> None:
        if not self.visible_entries:
            notify(self.page, "Nothing to export")
            return
        self.file_picker.save_file(
            file_name=export_filename(
                self.ctx.clock.today(), self.ctx.rules.export.filename_prefix
            ),
            allowed_extensions=["csv"],
        )

    def on_export_result(self, e: ft.FilePickerResultEvent) -> None:
        if not e.path:
            return
        csv_text = export_csv(self.visible_entries, self.ctx.rules.export)
        Path(e.path).write_text(csv_text, encoding="utf-8")
        logger.info("Exported %d entries to %s", len(self.visible_entries), e.path)
        notify(self.page, "CSV exported successfully!")
