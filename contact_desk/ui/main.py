import logging
import os
from pathlib import Path

import flet as ft

from contact_desk.app_shell.navigation import (
    ADMIN_ENTRIES_ROUTE,
    ENTRY_FORM_ROUTE,
    LOGIN_ROUTE,
    SIGNUP_ROUTE,
)
from contact_desk.app_shell.router import Router
from contact_desk.rules.loader import load_rules
from contact_desk.ui.context import ClientContext
from contact_desk.ui.layout import MainLayout
from contact_desk.ui.state import AppState
from contact_desk.ui.theme import AppTheme
from contact_desk.ui.views.entries_table import EntriesTableView
from contact_desk.ui.views.entry_form import EntryFormView
from contact_desk.ui.views.login import LoginView
from contact_desk.ui.views.signup import SignupView

logger = logging.getLogger(__name__)

# Configuration from environment (with sensible defaults for local dev)
API_URL = os.environ.get("CD_API_URL", "http://127.0.0.1:8000")
RULES_PATH = os.environ.get("CD_RULES_PATH", "rules.yaml")


def main(page: ft.Page) -> None:
    page.title = "Contact Desk"
    page.theme = AppTheme.light_theme()
    page.dark_theme = AppTheme.dark_theme()
    page.theme_mode = ft.ThemeMode.LIGHT

    rules_path = Path(RULES_PATH)
    if not rules_path.exists():
        error_msg = f"Error: {RULES_PATH} not found. Please create it."
        logger.error(error_msg)
        page.add(ft.Text(error_msg, color="red", size=20))
        return

    rules = load_rules(rules_path)
    logger.info("Rules loaded; API at %s", API_URL)

    ctx = ClientContext.create(API_URL, rules)
    state = AppState()
    router = Router(page, state, ctx.policy)

    # --- Layout Wrapper ---
    def handle_logout() -> None:
        state.logout()
        ctx.logout()
        page.go(LOGIN_ROUTE)

    def toggle_theme() -> None:
        if page.theme_mode == ft.ThemeMode.LIGHT:
            page.theme_mode = ft.ThemeMode.DARK
        else:
            page.theme_mode = ft.ThemeMode.LIGHT
        page.update()

    def make_view(route: str, title: str, content: ft.Control) -> ft.View:
        layout = MainLayout(
            page=page,
            app_state=state,
            content=content,
            title=title,
            on_logout=handle_logout,
            toggle_theme=toggle_theme,
        )
        return ft.View(route, [layout], padding=0)

    # --- Builders ---
    def login_builder(_: ft.Page) -> ft.View:
        return ft.View(LOGIN_ROUTE, [LoginView(page, ctx, state)])

    def signup_builder(_: ft.Page) -> ft.View:
        return ft.View(SIGNUP_ROUTE, [SignupView(page, ctx, state)], scroll=ft.ScrollMode.AUTO)

    def entry_form_builder(_: ft.Page) -> ft.View:
        return make_view(ENTRY_FORM_ROUTE, "New Entry", EntryFormView(page, ctx, state))

    def entries_table_builder(_: ft.Page) -> ft.View:
        return make_view(ADMIN_ENTRIES_ROUTE, "Dashboard", EntriesTableView(page, ctx, state))

    # --- Register Routes ---
    router.register(LOGIN_ROUTE, login_builder, protected=False)
    router.register(SIGNUP_ROUTE, signup_builder, protected=False)
    router.register(ENTRY_FORM_ROUTE, entry_form_builder, protected=True)
    router.register(ADMIN_ENTRIES_ROUTE, entries_table_builder, privileged=True)

    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop

    page.go(page.route or "/")


def run() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    ft.app(target=main)


if __name__ == "__main__":
    run()
