"""Проверки валидаторов настроек."""

from __future__ import annotations

from docker_provider.settings.validators import (
    CompositeValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
)


def test_type_validator() -> None:
    assert TypeValidator(int).validate(5) == (True, "")
    is_valid, error = TypeValidator(str).validate(123)
    assert not is_valid
    assert "str" in error


def test_type_validator_rejects_bool_for_int() -> None:
    assert not TypeValidator(int).validate(True)[0]
    assert TypeValidator(bool).validate(False) == (True, "")


def test_range_validator() -> None:
    validator = RangeValidator(0, 10)
    assert validator.validate(5) == (True, "")
    is_valid, error = validator.validate(11)
    assert not is_valid
    assert "out of range" in error
    assert not validator.validate("5")[0]


def test_enum_validator() -> None:
    validator = EnumValidator(["INFO", "DEBUG"])
    assert validator.validate("INFO") == (True, "")
    is_valid, error = validator.validate("TRACE")
    assert not is_valid
    assert "allowed values" in error


def test_regex_validator() -> None:
    validator = RegexValidator(r"^[a-z0-9]+$")
    assert validator.validate("docker0") == (True, "")
    assert not validator.validate("docker 0")[0]
    assert not validator.validate(0)[0]


def test_composite_validator_returns_first_error() -> None:
    validator = CompositeValidator([TypeValidator(str), RegexValidator(r"^/.*")])
    assert validator.validate("/sbin/ip") == (True, "")
    is_valid, error = validator.validate(1)
    assert not is_valid
    assert "Expected value of type" in error
