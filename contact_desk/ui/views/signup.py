import logging

import flet as ft

from contact_desk.adapters.http.entries_client import ApiError
from contact_desk.app_shell.navigation import LOGIN_ROUTE, landing_route_for
from contact_desk.ui.context import ClientContext
from contact_desk.ui.state import AppState

logger = logging.getLogger(__name__)

ROLE_LABELS = {"user": "User", "super_admin": "Super Admin"}


class SignupView(ft.Column):  # type: ignore
    """Account creation with a role choice. Signs the new user in on success."""

    def __init__(self, page: ft.Page, ctx: ClientContext, state: AppState) -> None:
        super().__init__()
        self.page = page
        self.ctx = ctx
        self.state = state

        self.name = ft.TextField(label="Full Name", hint_text="Enter your full name", width=300)
        self.email = ft.TextField(label="Email", hint_text="Enter your email", width=300)
        self.password = ft.TextField(
            label="Password", width=300, password=True, can_reveal_password=True
        )
        self.confirm = ft.TextField(
            label="Confirm Password", width=300, password=True, can_reveal_password=True
        )
        self.role = ft.Dropdown(
            label="Role",
            width=300,
            value="user",
            options=[
                ft.dropdown.Option(key=role, text=ROLE_LABELS.get(role, role))
                for role in ctx.rules.auth.signup_roles
            ],
        )
        self.error_text = ft.Text(color="red", visible=False)

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.expand = True
        self.controls = [
            ft.Text("Create Account", style="headlineMedium"),
            self.name,
            self.email,
            self.password,
            self.confirm,
            self.role,
            self.error_text,
            ft.ElevatedButton("Sign Up", on_click=self.signup_click),
            ft.TextButton(
                "Already have an account? Log in",
                on_click=lambda _: self.page.go(LOGIN_ROUTE),
            ),
        ]

    def _show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True
        self.update()

    def signup_click(self, e: ft.ControlEvent) -> None:
        name = (self.name.value or "").strip()
        email = (self.email.value or "").strip()
        pwd = self.password.value or ""

        if not name or not email or not pwd:
            self._show_error("Please fill in all fields.")
            return
        if pwd != (self.confirm.value or ""):
            self._show_error("Passwords do not match.")
            return

        try:
            self.ctx.api.signup(email, pwd, name=name, role=self.role.value or "user")
            user = self.ctx.api.login(email, pwd)
        except ApiError as err:
            logger.info("Signup failed for %s: %s", email, err.message)
            self._show_error(err.message)
            return

        self.state.current_user = user
        self.page.go(landing_route_for(user, self.ctx.policy))
