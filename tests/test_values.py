"""Unit tests for robot_preferences.values."""

from __future__ import annotations

import pytest

from robot_preferences import (
    BooleanValue,
    DoubleValue,
    DuplicateKeyError,
    IntegerValue,
    MemoryStorage,
    PreferencesRegistry,
    PreferenceTypeError,
    StringValue,
    UnregisteredValueError,
    ValueKind,
)


class TestConstruction:
    @pytest.mark.unit
    def test_kinds(self) -> None:
        assert StringValue("a", "x").kind is ValueKind.STRING
        assert IntegerValue("b", 1).kind is ValueKind.INTEGER
        assert DoubleValue("c", 1.0).kind is ValueKind.DOUBLE
        assert BooleanValue("d", True).kind is ValueKind.BOOLEAN

    @pytest.mark.unit
    def test_double_default_widened(self) -> None:
        value = DoubleValue("DriveStraight/DefaultSpeed", 1)
        assert value.default == 1.0
        assert isinstance(value.default, float)

    @pytest.mark.unit
    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            StringValue("", "x")

    @pytest.mark.unit
    def test_wrong_default_type_rejected(self) -> None:
        with pytest.raises(PreferenceTypeError):
            IntegerValue("Arm/Offset", "12")  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_unbound_by_default(self) -> None:
        value = DoubleValue("x/P", 0.081)
        assert value.is_bound is False
        assert value.registry is None

    @pytest.mark.unit
    def test_self_registration(self, registry: PreferencesRegistry) -> None:
        value = DoubleValue("x/P", 0.081, registry=registry)
        assert value.is_bound
        assert registry.get("x/P") is value

    @pytest.mark.unit
    def test_duplicate_key_rejected(self, registry: PreferencesRegistry) -> None:
        DoubleValue("x/P", 0.081, registry=registry)
        with pytest.raises(DuplicateKeyError):
            DoubleValue("x/P", 0.5, registry=registry)

    @pytest.mark.unit
    def test_repr(self) -> None:
        assert repr(IntegerValue("Arm/Offset", 3)) == "IntegerValue(key='Arm/Offset', default=3)"


class TestUnboundAccess:
    @pytest.mark.unit
    def test_get_value_raises(self) -> None:
        with pytest.raises(UnregisteredValueError):
            DoubleValue("x/P", 0.081).get_value()

    @pytest.mark.unit
    def test_set_value_raises(self) -> None:
        with pytest.raises(UnregisteredValueError):
            BooleanValue("flag", True).set_value(False)


class TestBoundAccess:
    @pytest.mark.unit
    def test_missing_key_returns_default(self, registry: PreferencesRegistry) -> None:
        value = StringValue("Auto/Mode", "left", registry=registry)
        assert value.get_value() == "left"
        assert value.exists() is False

    @pytest.mark.unit
    def test_set_then_get(self, registry: PreferencesRegistry) -> None:
        value = IntegerValue("Arm/Offset", 3, registry=registry)
        value.set_value(9)
        assert value.get_value() == 9
        assert value.exists() is True

    @pytest.mark.unit
    def test_set_wrong_type_does_not_write(self, registry: PreferencesRegistry) -> None:
        value = BooleanValue("flag", True, registry=registry)
        with pytest.raises(PreferenceTypeError):
            value.set_value("yes")  # type: ignore[arg-type]
        assert value.exists() is False

    @pytest.mark.unit
    def test_stored_type_mismatch_falls_back_to_default(self) -> None:
        registry = PreferencesRegistry(MemoryStorage({"Arm/Offset": "oops"}))
        value = IntegerValue("Arm/Offset", 3, registry=registry)
        assert value.get_value() == 3

    @pytest.mark.unit
    def test_write_default_value_idempotent(self, registry: PreferencesRegistry) -> None:
        value = DoubleValue("x/P", 0.081, registry=registry)
        value.set_value(0.5)
        value.write_default_value()
        first = value.get_value()
        value.write_default_value()
        assert value.get_value() == first == 0.081

    @pytest.mark.unit
    def test_report_if_not_default(self, registry: PreferencesRegistry) -> None:
        value = DoubleValue("x/P", 0.081, registry=registry)
        assert value.report_if_not_default() is None
        value.set_value(0.2)
        notice = value.report_if_not_default()
        assert notice is not None
        assert notice.message == "NON-DEFAULT PREFERENCE: x/P = 0.2"
        assert value.get_value() == 0.2
