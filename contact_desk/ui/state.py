from dataclasses import dataclass, field

from contact_desk.adapters.http.entries_client import SessionUser
from contact_desk.domain.entities import Entry


@dataclass
class AppState:
    current_user: SessionUser | None = None
    # Last list fetched from the API; filters are always applied to this copy.
    entries: list[Entry] = field(default_factory=list)

    def logout(self) -> None:
        self.current_user = None
        self.entries = []
