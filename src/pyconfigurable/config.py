# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Config module"""

from __future__ import annotations

__all__ = ["Config"]

import reprlib
from copy import deepcopy
from threading import RLock
from typing import Any, Iterable, Iterator, Mapping

from loguru import logger

from ._names import SettingNames
from .exceptions import ConstructorError, FrozenConfigError, UnknownSettingError
from .settings import Settings


class Config:
    """
    Mutable materialization of a Settings registry.

    Values are resolved lazily: the default of a setting is evaluated (and passed
    through its constructor) on the first get(), then cached. Nested settings
    resolve to a child Config.

    Settings are also reachable as attributes, except those named like a Config
    member ('settings', 'copy', 'update', ...): use get() / set() or item access
    for them.
    """

    __slots__ = ("__settings", "__values", "__lock", "__finalized", "__weakref__")

    def __init__(self, settings: Settings) -> None:
        if not isinstance(settings, Settings):
            raise TypeError(f"Expected Settings, got {type(settings).__qualname__}")
        self.__settings: Settings = settings
        self.__values: dict[str, Any] = {}
        self.__lock = RLock()
        self.__finalized: bool = False

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        values = self.__values
        return f"{type(self).__name__}({', '.join(f'{name}={values[name]!r}' for name in self.__settings.names() if name in values)})"

    def get(self, name: str) -> Any:
        values = self.__values
        try:
            return values[name]
        except KeyError:
            pass

        setting = self.__settings[name]
        with self.__lock:
            try:
                return values[name]
            except KeyError:  # Not resolved by another thread
                pass
            value: Any
            if setting.nested is not None:
                value = Config(setting.nested)
            else:
                value = setting.evaluate()
            values[name] = value
            return value

    def set(self, name: str, value: Any) -> None:
        setting = self.__settings[name]
        with self.__lock:
            self.__check_not_finalized()
            if setting.nested is not None:
                if not isinstance(value, Mapping):
                    raise ConstructorError(name, value, "Nested setting only accepts a mapping")
                child: Config = self.get(name)
                child.update(value)
                return
            self.__values[name] = setting.construct(value)

    def update(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]] = (), /, **kwargs: Any) -> None:
        """
        Set several settings at once.

        Every value is constructed before anything is written: if one of them fails,
        the configuration is left untouched.
        """
        items: dict[str, Any] = dict(values)
        items.update(kwargs)
        with self.__lock:
            self.__commit(self.__stage(items))

    def __stage(self, items: Mapping[str, Any]) -> dict[str, Any]:
        self.__check_not_finalized()
        settings = self.__settings
        for name in items:
            if name not in settings:
                raise UnknownSettingError(name)
        staged: dict[str, Any] = {}
        for name, value in items.items():
            setting = settings[name]
            if setting.nested is None:
                staged[name] = setting.construct(value)
                continue
            if not isinstance(value, Mapping):
                raise ConstructorError(name, value, "Nested setting only accepts a mapping")
            child: Config = self.get(name)
            with child.__lock:
                staged[name] = (child, child.__stage(value))
        return staged

    def __commit(self, staged: dict[str, Any]) -> None:
        settings = self.__settings
        values = self.__values
        for name, value in staged.items():
            if settings[name].nested is None:
                values[name] = value
                continue
            child, child_staged = value
            with child.__lock:
                child.__commit(child_staged)

    def reset(self, name: str) -> None:
        self.__settings[name]
        with self.__lock:
            self.__check_not_finalized()
            self.__values.pop(name, None)

    def to_mapping(self) -> dict[str, Any]:
        with self.__lock:
            get = self.get
            return {
                name: value.to_mapping() if isinstance(value, Config) else value
                for name in self.__settings.names()
                for value in (get(name),)
            }

    def finalize(self) -> None:
        with self.__lock:
            if self.__finalized:
                return
            for name in self.__settings.names():
                value = self.get(name)
                if isinstance(value, Config):
                    value.finalize()
            self.__finalized = True
        logger.debug(f"Finalized configuration with settings {list(self.__settings.names())}")

    @property
    def finalized(self) -> bool:
        return self.__finalized

    @property
    def settings(self) -> Settings:
        return self.__settings

    def names(self) -> SettingNames:
        return self.__settings.names()

    def copy(self) -> Config:
        with self.__lock:
            config = Config(self.__settings)
            config.__values.update(
                {name: value.copy() if isinstance(value, Config) else value for name, value in self.__values.items()}
            )
            return config

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Config:
        with self.__lock:
            config = Config(self.__settings)
            memo[id(self)] = config
            config.__values.update({name: deepcopy(value, memo) for name, value in self.__values.items()})
            return config

    def _rebind(self, settings: Settings) -> None:
        with self.__lock:
            if any(setting.name not in settings for setting in self.__settings):
                raise ValueError("The new registry must contain every already declared setting")
            self.__settings = settings

    def __check_not_finalized(self) -> None:
        if self.__finalized:
            raise FrozenConfigError()

    def __getitem__(self, name: str, /) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any, /) -> None:
        return self.set(name, value)

    def __contains__(self, name: object, /) -> bool:
        return name in self.__settings

    def __iter__(self) -> Iterator[str]:
        return iter(self.__settings.names())

    def __len__(self) -> int:
        return len(self.__settings)

    def __getattr__(self, name: str, /) -> Any:
        if name.startswith(f"_{Config.__name__}__"):  # Slot not initialized yet
            raise AttributeError(name)
        try:
            return self.get(name)
        except UnknownSettingError as exc:
            raise AttributeError(f"{type(self).__name__!r} object has no setting {name!r}") from exc

    def __setattr__(self, name: str, value: Any, /) -> None:
        if name.startswith(f"_{Config.__name__}__"):
            return object.__setattr__(self, name, value)
        if hasattr(type(self), name):
            # 'config.settings' must keep reading the Config member
            raise AttributeError(f"{name!r} is a {type(self).__name__} attribute, use set({name!r}, value) instead")
        try:
            self.set(name, value)
        except UnknownSettingError as exc:
            raise AttributeError(f"{type(self).__name__!r} object has no setting {name!r}") from exc

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(self.__settings.names()))
