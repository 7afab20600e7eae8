# -*- coding: Utf-8 -*-

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pyconfigurable import (
    Config,
    Configurable,
    FrozenConfigError,
    ReaderShadowingWarning,
    SettingDefinitionError,
    SettingReader,
)

import pytest

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class TestConfigurableInheritance:
    def test__subclass__declaration_does_not_affect_base(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        class B(A):
            pass

        # Act
        B.declare_setting("x")

        # Assert
        assert "x" not in A.settings()
        assert "x" in B.settings()

    def test__subclass__config_is_independent(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)

        class B(A):
            pass

        # Act
        B.config.set("y", 2)

        # Assert
        assert A.config.get("y") == 1
        assert B.config.get("y") == 2

    def test__subclass__shares_registry_until_declaration(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)

        class B(A):
            pass

        # Act
        shared = B._settings() is A._settings()
        B.declare_setting("x")

        # Assert
        assert shared
        assert B._settings() is not A._settings()
        assert B.settings() == ["y", "x"]
        assert A.settings() == ["y"]

    def test__base__declaration_after_subclass_does_not_affect_subclass(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)

        class B(A):
            pass

        # Act
        A.declare_setting("late")

        # Assert
        assert A.settings() == ["y", "late"]
        assert B.settings() == ["y"]

    def test__siblings__are_independent(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("a")

        class Left(A):
            pass

        class Right(A):
            pass

        # Act
        Left.declare_setting("left")
        Right.declare_setting("right")

        # Assert
        assert Left.settings() == ["a", "left"]
        assert Right.settings() == ["a", "right"]
        assert A.settings() == ["a"]

    def test__multiple_inheritance__merges_in_mro_order(self) -> None:
        # Arrange
        class Left(Configurable):
            pass

        Left.setting("shared", "left").setting("l")

        class Right(Configurable):
            pass

        Right.setting("shared", "right").setting("r")

        # Act
        class Both(Left, Right):
            pass

        Both.declare_setting("own")

        # Assert
        assert Both.settings() == ["shared", "l", "r", "own"]
        assert Both.config.get("shared") == "left"
        assert Left.settings() == ["shared", "l"]
        assert Right.settings() == ["shared", "r"]

    def test__multiple_inheritance__diamond(self) -> None:
        # Arrange
        class Base(Configurable):
            pass

        Base.declare_setting("base", 0)

        class Left(Base):
            pass

        Left.declare_setting("l")

        class Right(Base):
            pass

        Right.declare_setting("r")

        # Act
        class Both(Left, Right):
            pass

        # Assert
        assert Both.settings() == ["base", "l", "r"]

    def test__existing_instance__sees_base_declarations_after_subclassing(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("a", 1)
        obj = A()
        assert obj.config.get("a") == 1

        class B(A):
            pass

        # Act
        A.declare_setting("b", 2, reader=True)

        # Assert
        assert obj.config.get("b") == 2
        assert obj.b == 2  # type: ignore[attr-defined]
        assert obj.config.get("a") == 1
        assert "b" not in B.settings()

    def test__existing_subclass_instance__sees_subclass_declarations(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("a", 1)

        class B(A):
            pass

        obj = B()
        obj.config.set("a", 10)

        # Act
        B.declare_setting("x", "x")

        # Assert
        assert obj.config.to_mapping() == {"a": 10, "x": "x"}
        assert "x" not in A().config

    def test__non_configurable_mixin_is_ignored(self) -> None:
        # Arrange
        class Mixin:
            pass

        # Act
        class A(Mixin, Configurable):
            pass

        A.declare_setting("a", 1)

        # Assert
        assert A.settings() == ["a"]

    def test__coordinator_attribute_cannot_be_set_manually(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(TypeError):

            class A(Configurable):
                __settings_coordinator__ = None

    def test__configurable_itself_declares_nothing(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(TypeError, match=r"subclass it first"):
            _ = Configurable.config
        with pytest.raises(TypeError, match=r"subclass it first"):
            Configurable.declare_setting("a")


class TestConfigurableConfig:
    def test__config__nested_settings(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act
        A.declare_setting("group", nested=lambda group: group.setting("inner", 1))

        # Assert
        assert A.config.get("group").get("inner") == 1
        assert A.config.group.inner == 1

    def test__config__to_mapping(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.setting("a", 1).setting("b", 2)

        # Act
        A.config.set("b", 5)

        # Assert
        assert A.config.to_mapping() == {"a": 1, "b": 5}

    def test__config__class_config_is_cached(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act & Assert
        assert isinstance(A.config, Config)
        assert A.config is A.config

    def test__config__instances_are_independent(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)
        A.config.set("y", 100)
        first = A()
        second = A()

        # Act
        first.config.set("y", 5)

        # Assert
        assert first.config is first.config
        assert first.config is not second.config
        assert first.config.get("y") == 5
        assert second.config.get("y") == 1
        assert A.config.get("y") == 100

    def test__config__is_read_only(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        obj = A()

        # Act & Assert
        with pytest.raises(AttributeError, match=r"Read-only attribute"):
            obj.config = None  # type: ignore[assignment]
        with pytest.raises(AttributeError, match=r"Read-only attribute"):
            del obj.config

    def test__config__instance_must_be_weak_referenceable(self) -> None:
        # Arrange
        class Slotted(Configurable):
            __slots__ = ()

        obj = Slotted()

        # Act & Assert
        with pytest.raises(TypeError, match=r"must be weak-referenceable"):
            _ = obj.config

    def test__config__slotted_instance_with_weakref(self) -> None:
        # Arrange
        class Slotted(Configurable):
            __slots__ = ("__weakref__",)

        Slotted.declare_setting("a", 1)

        # Act
        config = Slotted().config

        # Assert
        assert config.get("a") == 1

    def test__configure__updates_class_config_and_chains(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.setting("a", 1).setting("b", 2)

        # Act
        result = A.configure({"a": 10}).configure(b=20)

        # Assert
        assert result is A
        assert A.config.to_mapping() == {"a": 10, "b": 20}

    def test__setting__is_chainable(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act
        result = A.setting("a", 1).setting("b", 2)

        # Assert
        assert result is A
        assert A.settings() == ["a", "b"]

    def test__declare_setting__returns_setting(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act
        setting = A.declare_setting("port", "80", constructor=int)

        # Assert
        assert setting.name == "port"
        assert A._settings()["port"] is setting
        assert A.config.get("port") == 80

    def test__finalize_config__freezes_class(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)

        # Act
        A.finalize_config()

        # Assert
        assert A.config.finalized
        with pytest.raises(FrozenConfigError):
            A.declare_setting("x")
        with pytest.raises(FrozenConfigError):
            A.configure(y=2)
        assert A.settings() == ["y"]

    def test__finalize_config__subclass_defined_afterwards_stays_open(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1)
        A.finalize_config()

        # Act
        class B(A):
            pass

        B.declare_setting("x")
        B.config.set("y", 3)

        # Assert
        assert B.settings() == ["y", "x"]
        assert B.config.get("y") == 3
        assert A.settings() == ["y"]
        assert A.config.get("y") == 1


class TestConfigurableReaders:
    def test__reader__on_class_and_instances(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("debug", False, constructor=bool, reader=True)
        obj = A()

        # Act
        obj.config.set("debug", 1)

        # Assert
        assert isinstance(vars(A)["debug"], SettingReader)
        assert A.debug is False  # type: ignore[attr-defined]
        assert obj.debug is True  # type: ignore[attr-defined]

    def test__reader__follows_class_config(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("level", "info", reader=True)

        # Act
        A.configure(level="debug")

        # Assert
        assert A.level == "debug"  # type: ignore[attr-defined]

    def test__reader__subclass_resolves_against_subclass_config(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("y", 1, reader=True)

        class B(A):
            pass

        # Act
        B.config.set("y", 2)

        # Assert
        assert A.y == 1  # type: ignore[attr-defined]
        assert B.y == 2  # type: ignore[attr-defined]
        assert B().y == 1  # type: ignore[attr-defined]

    def test__reader__is_read_only(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        A.declare_setting("debug", False, reader=True)
        obj: Any = A()

        # Act & Assert
        with pytest.raises(AttributeError, match=r"read-only setting reader"):
            obj.debug = True
        with pytest.raises(AttributeError, match=r"read-only setting reader"):
            del obj.debug
        assert obj.debug is False

    @pytest.mark.parametrize("name", ["config", "settings", "declare_setting", "configure", "_settings"])
    def test__reader__reserved_names(self, name: str) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act
        with pytest.raises(SettingDefinitionError, match=r"Cannot define a reader which overrides"):
            A.declare_setting(name, reader=True)

        # Assert
        assert A.settings() == []
        assert vars(A).get(name) is None

    def test__reader__reserved_name_without_reader_is_allowed(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        # Act
        A.declare_setting("config", "value")

        # Assert
        assert A.config.get("config") == "value"

    def test__reader__shadowing_warning(self) -> None:
        # Arrange
        class A(Configurable):
            def name(self) -> str:
                return "method"

        # Act
        with pytest.warns(ReaderShadowingWarning, match=r"shadows"):
            A.declare_setting("name", "setting", reader=True)

        # Assert
        assert A().name == "setting"  # type: ignore[comparison-overlap]

    def test__reader__shadowing_warning_points_to_caller(self) -> None:
        # Arrange
        class A(Configurable):
            def name(self) -> str:
                return "method"

        # Act
        with pytest.warns(ReaderShadowingWarning) as record:
            A.setting("name", "setting", reader=True)

        # Assert
        assert len(record) == 1
        assert record[0].filename == __file__

    def test__reader__inherited_by_subclass_lacking_the_setting(self) -> None:
        # Arrange
        class A(Configurable):
            pass

        class B(A):
            pass

        # Act
        A.declare_setting("z", 1, reader=True)

        # Assert
        assert A.z == 1  # type: ignore[attr-defined]
        assert not hasattr(B, "z")
        assert not hasattr(B(), "z")
        assert getattr(B, "z", "fallback") == "fallback"
        with pytest.raises(AttributeError, match=r"has no setting 'z'") as exc_info:
            _ = B.z  # type: ignore[attr-defined]
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test__reader_registrar__class_keyword(self, mocker: MockerFixture) -> None:
        # Arrange
        registrar = mocker.Mock()

        class A(Configurable, reader_registrar=registrar):
            pass

        class B(A):
            pass

        # Act
        A.declare_setting("a", 1, reader=True)
        B.declare_setting("b", 2, reader=True)

        # Assert
        assert registrar.define_reader.call_args_list == [
            mocker.call(A, "a", mocker.ANY),
            mocker.call(B, "b", mocker.ANY),
        ]
        resolver = registrar.define_reader.call_args_list[0].args[2]
        assert resolver(A) == 1
        assert resolver(A()) == 1
