import logging

import flet as ft

from contact_desk.adapters.http.entries_client import ApiError
from contact_desk.app_shell.navigation import SIGNUP_ROUTE, landing_route_for
from contact_desk.ui.context import ClientContext
from contact_desk.ui.state import AppState

logger = logging.getLogger(__name__)


class LoginView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ClientContext, state: AppState) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.state = state

        self.email = ft.TextField(label="Email", width=300)
        self.password = ft.TextField(
            label="Password", width=300, password=True, can_reveal_password=True
        )
        self.error_text = ft.Text(color="red", visible=False)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True
        self.controls = [
            ft.Text("Contact Desk", style="headlineMedium"),
            self.email,
            self.password,
            self.error_text,
            ft.ElevatedButton("Login", on_click=self.login_click),
            ft.TextButton(
                "Don't have an account? Sign up",
                on_click=lambda _: self.page.go(SIGNUP_ROUTE),
            ),
        ]

    def _show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True
        self.update()

    def login_click(self, e: ft.ControlEvent) -> None:
        email = (self.email.value or "").strip()
        pwd = self.password.value or ""

        if not email or not pwd:
            self._show_error("Please enter email and password.")
            return

        try:
            user = self.ctx.api.login(email, pwd)
        except ApiError as err:
            logger.info("Login failed for %s: %s", email, err.message)
            self._show_error(err.message)
            return

        self.state.current_user = user
        self.page.go(landing_route_for(user, self.ctx.policy))
