"""Contact Desk - role-gated contact entry registry."""

__version__ = "0.1.0"
