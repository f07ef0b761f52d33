from pathlib import Path

import pytest

from contact_desk.rules.loader import load_rules

RULES_PATH = Path(__file__).resolve().parent.parent.parent / "rules.yaml"


def test_load_project_rules():
    rules = load_rules(RULES_PATH)

    assert rules.project.slug == "contact-desk"
    assert rules.entries.mobile_digits.min == 10
    assert rules.entries.mobile_digits.max == 15
    assert rules.entries.keys.entry_prefix == "user_entry:"
    assert rules.entries.keys.index_prefix == "entry_owner:"
    assert rules.export.header == ["Name", "Mobile No", "Address", "Date Added"]
    assert rules.rbac.privileged_roles == ["super_admin"]
    assert "super_admin" in rules.auth.signup_roles


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("rbac: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping"):
        load_rules(path)


def test_schema_errors_are_reported(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("project:\n  slug: x\n  rules_version: '1'\n")

    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)
