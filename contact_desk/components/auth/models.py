from dataclasses import dataclass

from contact_desk.domain.entities import User


@dataclass
class SignupInput:
    email: str
    password: str
    name: str | None = None
    role: str = "user"


@dataclass
class LoginInput:
    email: str
    password: str


@dataclass
class IssueTokenInput:
    user: User


@dataclass
class VerifyTokenInput:
    token: str


@dataclass
class AuthOutput:
    user: User | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None


@dataclass
class UserOutput:
    user: User | None = None
    success: bool = False
    error: str | None = None
