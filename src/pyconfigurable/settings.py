# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Settings registry module"""

from __future__ import annotations

__all__ = ["Settings"]

from typing import Iterable, Iterator

from ._names import SettingNames
from .exceptions import DuplicateSettingError, UnknownSettingError
from .setting import Setting


class Settings:
    """
    Ordered, name-unique and append-only collection of Setting objects.

    The declaration order is kept for iteration, names() and Config.to_mapping().
    """

    __slots__ = ("__settings", "__weakref__")

    def __init__(self, settings: Iterable[Setting] = (), /) -> None:
        self.__settings: dict[str, Setting] = {}
        for setting in settings:
            self.append(setting)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.__settings.values())!r})"

    def append(self, setting: Setting) -> None:
        if not isinstance(setting, Setting):
            raise TypeError(f"Expected a Setting, got {type(setting).__qualname__}")
        settings = self.__settings
        if setting.name in settings:
            raise DuplicateSettingError(setting.name)
        settings[setting.name] = setting

    def find(self, name: str) -> Setting | None:
        return self.__settings.get(name)

    def names(self) -> SettingNames:
        return SettingNames(self.__settings)

    def copy(self) -> Settings:
        return Settings(self.__settings.values())

    __copy__ = copy

    def __getitem__(self, name: str, /) -> Setting:
        try:
            return self.__settings[name]
        except KeyError:
            raise UnknownSettingError(name) from None

    def __contains__(self, name: object, /) -> bool:
        return name in self.__settings

    def __iter__(self) -> Iterator[Setting]:
        return iter(self.__settings.values())

    def __len__(self) -> int:
        return len(self.__settings)

    def __bool__(self) -> bool:
        return True if self.__settings else False
