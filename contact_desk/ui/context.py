from __future__ import annotations

from dataclasses import dataclass

from contact_desk.adapters.clock import SystemClock
from contact_desk.adapters.http.entries_client import EntriesApiClient
from contact_desk.domain.policy import PolicyEngine
from contact_desk.rules.models import Rules


@dataclass
class ClientContext:
    """Everything a view needs: the API client, the role policy and the rules."""

    api: EntriesApiClient
    policy: PolicyEngine
    rules: Rules
    clock: SystemClock

    @classmethod
    def create(cls, api_url: str, rules: Rules) -> ClientContext:
        return cls(
            api=EntriesApiClient(base_url=api_url),
            policy=PolicyEngine(rules),
            rules=rules,
            clock=SystemClock(),
        )

    def logout(self) -> None:
        self.api.logout()
