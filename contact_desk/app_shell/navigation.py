"""Route names and role-based landing pages."""

from typing import Any

from contact_desk.domain.policy import PolicyEngine

LOGIN_ROUTE = "/login"
SIGNUP_ROUTE = "/signup"
ENTRY_FORM_ROUTE = "/entries/new"
ADMIN_ENTRIES_ROUTE = "/admin/entries"


def landing_route_for(user: Any | None, policy: PolicyEngine) -> str:
    """Where a user lands after login: the dashboard for privileged roles, the form otherwise."""
    if user is None:
        return LOGIN_ROUTE
    if policy.is_privileged(user):
        return ADMIN_ENTRIES_ROUTE
    return ENTRY_FORM_ROUTE
