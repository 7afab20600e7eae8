# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Settings declaration DSL module"""

from __future__ import annotations

__all__ = ["DSL", "NestedDSL", "NestedBlock"]

from typing import Any, Callable, TypeAlias

from loguru import logger

from .exceptions import SettingDefinitionError
from .setting import Setting, check_setting_name
from .settings import Settings

NestedBlock: TypeAlias = Callable[["NestedDSL"], Any]

_NO_DEFAULT: Any = object()


class DSL:
    """
    Builds Setting objects from declaration calls.

    The builder never stores what it builds: appending the result to a Settings
    registry is up to the caller.
    """

    __slots__ = ()

    def setting(
        self,
        name: str,
        default: Any = _NO_DEFAULT,
        *,
        constructor: Callable[[Any], Any] | None = None,
        reader: bool = False,
        nested: NestedBlock | None = None,
    ) -> Setting:
        check_setting_name(name)
        if nested is None:
            return Setting(
                name=name,
                default=None if default is _NO_DEFAULT else default,
                constructor=constructor,
                reader=reader,
            )

        if not callable(nested):
            raise TypeError(f"{name!r}: nested block must be callable")
        if default is not _NO_DEFAULT:
            raise SettingDefinitionError(name, "A nested block cannot be given with a default value")
        if constructor is not None:
            raise SettingDefinitionError(name, "A nested block cannot be given with a constructor")

        nested_dsl = NestedDSL(self)
        nested(nested_dsl)
        logger.debug(f"Built nested setting {name!r} with {len(nested_dsl.settings)} child setting(s)")
        return Setting(name=name, reader=reader, nested=nested_dsl.settings)


class NestedDSL:
    """
    Handle given to a nested block.

    Each setting() call builds the Setting with the parent DSL then appends it to
    a new child registry.
    """

    __slots__ = ("__dsl", "__settings")

    def __init__(self, dsl: DSL) -> None:
        self.__dsl: DSL = dsl
        self.__settings: Settings = Settings()

    def setting(
        self,
        name: str,
        default: Any = _NO_DEFAULT,
        *,
        constructor: Callable[[Any], Any] | None = None,
        reader: bool = False,
        nested: NestedBlock | None = None,
    ) -> NestedDSL:
        setting = self.__dsl.setting(name, default, constructor=constructor, reader=reader, nested=nested)
        self.__settings.append(setting)
        return self

    @property
    def settings(self) -> Settings:
        return self.__settings
