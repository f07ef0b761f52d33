from typing import Any

from contact_desk.rules.models import Rules


class PolicyEngine:
    """Role-based permission checks driven by the ``rbac`` section of rules.yaml.

    Works on anything carrying a ``role`` attribute, so the server-side ``User``
    and the client-side session user share the same checks.
    """

    def __init__(self, rules: Rules):
        self.rules = rules

    def check_permission(self, role: str | None, action: str) -> bool:
        """
        Check whether the role may perform the action.

        Supports a global wildcard ("*") and scoped wildcards
        ("entries:*" matches "entries:delete").
        """
        if not role:
            return False

        allowed_actions = self.rules.rbac.roles.get(role, [])
        if "*" in allowed_actions:
            return True
        if action in allowed_actions:
            return True

        if ":" in action:
            scope = action.split(":")[0]
            if f"{scope}:*" in allowed_actions:
                return True

        return False

    def is_privileged(self, user: Any) -> bool:
        role = getattr(user, "role", None)
        return role in self.rules.rbac.privileged_roles

    def can_create_entry(self, user: Any) -> bool:
        return self.check_permission(getattr(user, "role", None), "entries:create")

    def can_read_all_entries(self, user: Any) -> bool:
        return self.check_permission(getattr(user, "role", None), "entries:read_all")

    def can_modify_entries(self, user: Any) -> bool:
        # Update and delete are granted together; ownership is never consulted.
        role = getattr(user, "role", None)
        return self.check_permission(role, "entries:update") and self.check_permission(
            role, "entries:delete"
        )

    def can_export_entries(self, user: Any) -> bool:
        return self.check_permission(getattr(user, "role", None), "entries:export")
