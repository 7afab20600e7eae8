# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Configuration errors module"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "ConstructorError",
    "DuplicateSettingError",
    "FrozenConfigError",
    "InvalidSettingNameError",
    "ReaderShadowingWarning",
    "SettingDefinitionError",
    "SettingError",
    "UnknownSettingError",
]

from typing import Any


class ConfigurationError(Exception):
    pass


class SettingError(ConfigurationError):
    def __init__(self, name: str, message: str) -> None:
        if name:
            message = f"{name!r}: {message}"
        super().__init__(message)
        self.name: str = name

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""


class DuplicateSettingError(SettingError):
    def __init__(self, name: str, message: str = "") -> None:
        super().__init__(name, message or "Setting already declared")


class UnknownSettingError(SettingError, KeyError):
    def __init__(self, name: str, message: str = "") -> None:
        if not message:
            if name:
                message = "Unknown setting"
            else:
                message = "Empty string given"
        super().__init__(name, message)


class InvalidSettingNameError(SettingError, ValueError):
    pass


class SettingDefinitionError(SettingError):
    pass


class ConstructorError(SettingError):
    def __init__(self, name: str, value: Any, message: str = "") -> None:
        super().__init__(name, message or f"Cannot construct value from {value!r}")
        self.value: Any = value


class FrozenConfigError(ConfigurationError):
    def __init__(self, message: str = "Cannot modify a finalized configuration") -> None:
        super().__init__(message)


class ReaderShadowingWarning(UserWarning):
    pass
