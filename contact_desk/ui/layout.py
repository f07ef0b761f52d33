from collections.abc import Callable

import flet as ft

from contact_desk.ui.state import AppState


def notify(page: ft.Page, message: str, error: bool = False) -> None:
    """Show a SnackBar notification."""
    page.snack_bar = ft.SnackBar(
        ft.Text(message),
        bgcolor="errorContainer" if error else None,
    )
    page.snack_bar.open = True
    page.update()


class MainLayout(ft.Column):  # type: ignore
    """
    Header bar (title, signed-in user, theme toggle, logout) above the view content.
    """

    def __init__(
        self,
        page: ft.Page,
        app_state: AppState,
        content: ft.Control,
        title: str,
        on_logout: Callable[[], None],
        toggle_theme: Callable[[], None],
    ):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.app_state = app_state

        user = app_state.current_user
        user_label = f"{user.name} ({user.role})" if user else ""

        self.app_bar = ft.Container(
            content=ft.Row(
                [
                    ft.Text(title, size=20, weight=ft.FontWeight.BOLD, color="primary"),
                    ft.Container(expand=True),
                    ft.Text(user_label, color="onSurfaceVariant"),
                    ft.IconButton(
                        ft.Icons.DARK_MODE
                        if page.theme_mode == ft.ThemeMode.LIGHT
                        else ft.Icons.LIGHT_MODE,
                        on_click=lambda _: toggle_theme(),
                    ),
                    ft.OutlinedButton(
                        "Logout", icon=ft.Icons.LOGOUT, on_click=lambda _: on_logout()
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            bgcolor="surfaceVariant",
        )

        self.content_area = ft.Container(content=content, expand=True, padding=20)

        self.controls = [self.app_bar, self.content_area]
