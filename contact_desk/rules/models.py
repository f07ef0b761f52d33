from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RbacRules(BaseModel):
    roles: dict[str, list[str]]
    privileged_roles: list[str] = Field(default_factory=list)


class LengthRule(BaseModel):
    min: int
    max: int


class EditFormRules(BaseModel):
    name_min_length: int = 2
    address_min_length: int = 10
    mobile_pattern: str = r"^\+?[\d\s\-\(\)]{10,}$"


class KeyRules(BaseModel):
    entry_prefix: str = "user_entry:"
    index_prefix: str = "entry_owner:"


class EntryRules(BaseModel):
    mobile_digits: LengthRule
    edit_form: EditFormRules = Field(default_factory=EditFormRules)
    keys: KeyRules = Field(default_factory=KeyRules)


class ExportRules(BaseModel):
    header: list[str]
    date_format: str = "{month}/{day}/{year}"
    filename_prefix: str = "user-entries"


class PasswordRules(BaseModel):
    min_length: int


class TokenRules(BaseModel):
    ttl_minutes: int


class AuthRules(BaseModel):
    passwords: PasswordRules
    tokens: TokenRules
    signup_roles: list[str]


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    rbac: RbacRules
    entries: EntryRules
    export: ExportRules
    auth: AuthRules
    ops: OpsRules = Field(default_factory=OpsRules)
