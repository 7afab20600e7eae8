# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configurable classes module"""

from __future__ import annotations

__all__ = ["ConfigProperty", "Configurable"]

from threading import RLock
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, NoReturn, overload
from weakref import WeakKeyDictionary

from typing_extensions import Self, final

from ._names import SettingNames
from .config import Config
from .coordinator import SettingsCoordinator
from .dsl import _NO_DEFAULT, NestedBlock
from .reader import AttributeReaderRegistrar, ReaderRegistrar
from .setting import Setting
from .settings import Settings

_COORDINATOR_ATTR = "__settings_coordinator__"


def _coordinator(cls: type) -> SettingsCoordinator:
    try:
        return vars(cls)[_COORDINATOR_ATTR]
    except KeyError:
        raise TypeError(f"{cls.__qualname__} does not declare settings, subclass it first") from None


@final
class ConfigProperty:
    """
    Accessed from a class, returns the class Config.
    Accessed from an instance, returns the Config of this instance, built on first access.
    """

    __slots__ = ("__cache", "__cache_lock")

    def __init__(self) -> None:
        self.__cache: WeakKeyDictionary[Any, Config] = WeakKeyDictionary()
        self.__cache_lock = RLock()

    @overload
    def __get__(self, obj: None, objtype: type, /) -> Config:
        ...

    @overload
    def __get__(self, obj: object, objtype: type | None = None, /) -> Config:
        ...

    def __get__(self, obj: object, objtype: type | None = None, /) -> Config:
        if obj is None:
            if objtype is None:
                raise TypeError("__get__(None, None) is invalid")
            return _coordinator(objtype).config()

        try:
            return self.__cache[obj]
        except KeyError:
            pass
        except TypeError as exc:
            raise TypeError(f"{type(obj).__qualname__} objects must be weak-referenceable and hashable") from exc

        with self.__cache_lock:
            try:
                return self.__cache[obj]
            except KeyError:  # Not added by another thread
                self.__cache[obj] = config = _coordinator(type(obj)).new_instance_config()
                return config

    def __set__(self, obj: object, value: Any, /) -> NoReturn:
        raise AttributeError("Read-only attribute")

    def __delete__(self, obj: object, /) -> NoReturn:
        raise AttributeError("Read-only attribute")


class Configurable:
    """
    Base class for objects with declarative settings.

    Example:
        >>> class App(Configurable):
        ...     pass
        >>> App.declare_setting("debug", False, constructor=bool, reader=True)
        Setting('debug', default=False)
        >>> App.debug
        False
        >>> App.config.set("debug", 1)
        >>> App.debug
        True

    A subclass starts with the settings of its bases. Declaring a setting on
    the subclass never affects the bases, nor the other way around.
    """

    __slots__ = ()

    config: ConfigProperty = ConfigProperty()

    if TYPE_CHECKING:
        __settings_coordinator__: SettingsCoordinator

    def __init_subclass__(cls, /, *, reader_registrar: ReaderRegistrar | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if _COORDINATOR_ATTR in vars(cls):
            raise TypeError(f"{_COORDINATOR_ATTR!r} must not be set manually")

        parents: list[SettingsCoordinator] = []
        for base in cls.__bases__:
            if base is Configurable or not issubclass(base, Configurable):
                continue
            coordinator = _coordinator(base)
            if coordinator not in parents:
                parents.append(coordinator)

        config_getter: Callable[[Any], Config] = _get_config
        coordinator: SettingsCoordinator
        if not parents:
            coordinator = SettingsCoordinator(
                cls,
                reader_registrar=reader_registrar or AttributeReaderRegistrar(_RESERVED_NAMES),
                config_getter=config_getter,
            )
        else:
            coordinator = parents[0].derive(cls, reader_registrar=reader_registrar, config_getter=config_getter)
            if len(parents) > 1:
                coordinator.merge(*parents[1:])
        setattr(cls, _COORDINATOR_ATTR, coordinator)

    @classmethod
    def declare_setting(
        cls,
        name: str,
        default: Any = _NO_DEFAULT,
        *,
        constructor: Callable[[Any], Any] | None = None,
        reader: bool = False,
        nested: NestedBlock | None = None,
    ) -> Setting:
        return _coordinator(cls).declare_setting(name, default, constructor=constructor, reader=reader, nested=nested)

    @classmethod
    def setting(
        cls,
        name: str,
        default: Any = _NO_DEFAULT,
        *,
        constructor: Callable[[Any], Any] | None = None,
        reader: bool = False,
        nested: NestedBlock | None = None,
    ) -> type[Self]:
        _coordinator(cls).declare_setting(name, default, constructor=constructor, reader=reader, nested=nested)
        return cls

    @classmethod
    def settings(cls) -> SettingNames:
        return _coordinator(cls).settings()

    @classmethod
    def _settings(cls) -> Settings:
        return _coordinator(cls)._settings()

    @classmethod
    def configure(cls, values: Mapping[str, Any] | Iterable[tuple[str, Any]] = (), /, **kwargs: Any) -> type[Self]:
        _coordinator(cls).config().update(values, **kwargs)
        return cls

    @classmethod
    def finalize_config(cls) -> None:
        _coordinator(cls).finalize()


def _get_config(target: Any) -> Config:
    config: Config = target.config
    return config


_RESERVED_NAMES: frozenset[str] = frozenset(name for name in vars(Configurable) if not name.startswith("__"))
