# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Type-level settings coordinator module"""

from __future__ import annotations

__all__ = ["SettingsCoordinator"]

from threading import RLock
from typing import Any, Callable
from weakref import WeakSet

from loguru import logger
from typing_extensions import final

from ._names import SettingNames
from .config import Config
from .dsl import _NO_DEFAULT, DSL, NestedBlock
from .exceptions import DuplicateSettingError, FrozenConfigError, UnknownSettingError
from .reader import AttributeReaderRegistrar, ReaderRegistrar
from .setting import Setting
from .settings import Settings


@final
class SettingsCoordinator:
    """
    Owns the Settings registry of one declaring type.

    A derived coordinator shares the parent's registry until one of them
    declares a new setting: the declaring side then works on its own copy.
    """

    __slots__ = (
        "__owner",
        "__settings",
        "__owns_settings",
        "__config",
        "__instance_configs",
        "__dsl",
        "__names",
        "__registrar",
        "__config_getter",
        "__finalized",
        "__lock",
        "__weakref__",
    )

    def __init__(
        self,
        owner: Any,
        settings: Settings | None = None,
        *,
        reader_registrar: ReaderRegistrar | None = None,
        config_getter: Callable[[Any], Config] | None = None,
    ) -> None:
        if reader_registrar is not None and not isinstance(reader_registrar, ReaderRegistrar):
            raise TypeError(f"{reader_registrar!r} does not implement define_reader()")
        self.__owner: Any = owner
        self.__settings: Settings | None = settings
        self.__owns_settings: bool = settings is None
        self.__config: Config | None = None
        self.__instance_configs: WeakSet[Config] = WeakSet()
        self.__dsl: DSL | None = None
        self.__names: SettingNames | None = None
        self.__registrar: ReaderRegistrar | None = reader_registrar
        self.__config_getter: Callable[[Any], Config] | None = config_getter
        self.__finalized: bool = False
        self.__lock = RLock()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} owner={self.__owner!r} settings={list(self.settings())!r}>"

    def derive(
        self,
        owner: Any,
        *,
        reader_registrar: ReaderRegistrar | None = None,
        config_getter: Callable[[Any], Config] | None = None,
    ) -> SettingsCoordinator:
        with self.__lock:
            config = self.__config
            source: Settings = config.settings if config is not None else self._settings()
            # The registry is shared from now on: both sides copy it before their next declaration
            self.__owns_settings = False
        if reader_registrar is None:
            reader_registrar = self.__registrar
        if config_getter is None:
            config_getter = self.__config_getter
        logger.debug(f"Derived settings of {self.__owner!r} for {owner!r}")
        return SettingsCoordinator(owner, source, reader_registrar=reader_registrar, config_getter=config_getter)

    def merge(self, *others: SettingsCoordinator) -> None:
        with self.__lock:
            self.__check_not_finalized()
            settings: Settings = self._settings()
            merged: list[Setting] = [
                setting for other in others for setting in other._settings() if setting.name not in settings
            ]
            if not merged:
                return
            if not self.__owns_settings:
                self.__branch()
            settings = self._settings()
            for setting in merged:
                if setting.name not in settings:
                    settings.append(setting)
            self.__names = None
        logger.debug(f"Merged {len(merged)} inherited setting(s) into {self.__owner!r}")

    def declare_setting(
        self,
        name: str,
        default: Any = _NO_DEFAULT,
        *,
        constructor: Callable[[Any], Any] | None = None,
        reader: bool = False,
        nested: NestedBlock | None = None,
    ) -> Setting:
        setting = self.dsl.setting(name, default, constructor=constructor, reader=reader, nested=nested)
        with self.__lock:
            self.__check_can_add(setting)
            if setting.reader:
                self.__define_reader(setting.name)
            self.add(setting)
        return setting

    def add(self, setting: Setting) -> None:
        with self.__lock:
            self.__check_can_add(setting)
            if not self.__owns_settings:
                self.__branch()
            self._settings().append(setting)
            self.__names = None
        logger.debug(f"Declared setting {setting.name!r} on {self.__owner!r}")

    def settings(self) -> SettingNames:
        names = self.__names
        if names is None:
            with self.__lock:
                self.__names = names = self._settings().names()
        return names

    def _settings(self) -> Settings:
        settings = self.__settings
        if settings is None:
            with self.__lock:
                settings = self.__settings
                if settings is None:
                    self.__settings = settings = Settings()
                    self.__owns_settings = True
        return settings

    def config(self) -> Config:
        config = self.__config
        if config is None:
            with self.__lock:
                config = self.__config
                if config is None:
                    self.__config = config = Config(self._settings())
                    logger.debug(f"Materialized configuration of {self.__owner!r}")
        return config

    def new_instance_config(self) -> Config:
        with self.__lock:
            config = Config(self._settings())
            self.__instance_configs.add(config)
        return config

    def finalize(self) -> None:
        with self.__lock:
            self.config().finalize()
            self.__finalized = True

    @property
    def finalized(self) -> bool:
        return self.__finalized

    @property
    def owns_settings(self) -> bool:
        return self.__owns_settings

    @property
    def owner(self) -> Any:
        return self.__owner

    @property
    def dsl(self) -> DSL:
        dsl = self.__dsl
        if dsl is None:
            self.__dsl = dsl = DSL()
        return dsl

    @property
    def reader_registrar(self) -> ReaderRegistrar:
        registrar = self.__registrar
        if registrar is None:
            self.__registrar = registrar = AttributeReaderRegistrar()
        return registrar

    def __branch(self) -> None:
        settings = self._settings().copy()
        self.__settings = settings
        self.__owns_settings = True
        config = self.__config
        if config is not None:
            config._rebind(settings)
        for instance_config in self.__instance_configs:
            instance_config._rebind(settings)
        logger.debug(f"{self.__owner!r} now owns its settings registry ({len(settings)} inherited setting(s))")

    def __define_reader(self, name: str) -> None:
        config_getter: Callable[[Any], Config] = self.__config_getter or (lambda target: self.config())

        def resolver(target: Any) -> Any:
            try:
                return config_getter(target).get(name)
            except UnknownSettingError as exc:
                # Subclass derived before the reader was defined on its base
                raise AttributeError(f"{target!r} has no setting {name!r}") from exc

        self.reader_registrar.define_reader(self.__owner, name, resolver)

    def __check_can_add(self, setting: Setting) -> None:
        self.__check_not_finalized()
        if setting.name in self._settings():
            raise DuplicateSettingError(setting.name)

    def __check_not_finalized(self) -> None:
        if self.__finalized:
            raise FrozenConfigError(f"Cannot declare settings on {self.__owner!r}: configuration is finalized")
