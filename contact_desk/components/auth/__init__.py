"""
Auth component - local stand-in for the identity provider.

Handles signup, login, bearer token issue and verification.
"""

from .component import run_issue_token, run_login, run_signup, run_verify_token
from .models import (
    AuthOutput,
    IssueTokenInput,
    LoginInput,
    SignupInput,
    UserOutput,
    VerifyTokenInput,
)
from .ports import AuthAdapterPort, TimePort, UserRepoPort

__all__ = [
    # Entry points
    "run_signup",
    "run_login",
    "run_issue_token",
    "run_verify_token",
    # Models
    "AuthOutput",
    "IssueTokenInput",
    "LoginInput",
    "SignupInput",
    "UserOutput",
    "VerifyTokenInput",
    # Ports
    "AuthAdapterPort",
    "TimePort",
    "UserRepoPort",
]
