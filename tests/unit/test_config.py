import pytest

from contact_desk.app_shell.config import validate_ops_rules


def test_no_required_env_passes(rules):
    validate_ops_rules(rules)


def test_missing_required_env_fails(rules, monkeypatch):
    monkeypatch.delenv("CD_TEST_REQUIRED", raising=False)
    rules.ops.required_env = ["CD_TEST_REQUIRED"]

    with pytest.raises(RuntimeError, match="CD_TEST_REQUIRED"):
        validate_ops_rules(rules)


def test_present_required_env_passes(rules, monkeypatch):
    monkeypatch.setenv("CD_TEST_REQUIRED", "1")
    rules.ops.required_env = ["CD_TEST_REQUIRED"]

    validate_ops_rules(rules)
