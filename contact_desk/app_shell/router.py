import logging
from collections.abc import Callable
from typing import NamedTuple

import flet as ft

from contact_desk.app_shell.navigation import LOGIN_ROUTE, landing_route_for
from contact_desk.domain.policy import PolicyEngine
from contact_desk.ui.state import AppState

logger = logging.getLogger(__name__)


class RouteConfig(NamedTuple):
    builder: Callable[[ft.Page], ft.View]
    protected: bool
    privileged: bool


class Router:
    """
    Route table with an auth guard and a role guard.

    Protected routes send anonymous users to /login. Privileged routes send
    signed-in users without a privileged role to their own landing route.
    """

    def __init__(self, page: ft.Page, state: AppState, policy: PolicyEngine):
        self.page = page
        self.state = state
        self.policy = policy
        self.routes: dict[str, RouteConfig] = {}

    def register(
        self,
        route: str,
        builder: Callable[[ft.Page], ft.View],
        protected: bool = True,
        privileged: bool = False,
    ) -> None:
        self.routes[route] = RouteConfig(builder, protected or privileged, privileged)

    def resolve(self, route: str) -> str:
        """Return the route to actually show for ``route`` given the current session."""
        if route in ("", "/"):
            return landing_route_for(self.state.current_user, self.policy)

        config = self.routes.get(route)
        if config is None:
            return route

        if config.protected and not self.state.current_user:
            logger.info("Access denied to %s. Redirecting to %s.", route, LOGIN_ROUTE)
            return LOGIN_ROUTE

        if config.privileged and not self.policy.is_privileged(self.state.current_user):
            landing = landing_route_for(self.state.current_user, self.policy)
            logger.info("Role guard on %s. Redirecting to %s.", route, landing)
            return landing

        return route

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or "/"
        logger.info("Navigate to: %s", route)

        target = self.resolve(route)
        if target != route:
            self.page.go(target)
            return

        self.page.views.clear()

        config = self.routes.get(route)
        if not config:
            logger.warning("No route found for: %s", route)
            self.page.views.append(
                ft.View(
                    "/404",
                    [ft.AppBar(title=ft.Text("404")), ft.Text(f"Page not found: {route}")],
                )
            )
            self.page.update()
            return

        self.page.views.append(config.builder(self.page))
        self.page.update()

    def view_pop(self, view: ft.View) -> None:
        self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)
