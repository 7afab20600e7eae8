# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Setting definition module"""

from __future__ import annotations

__all__ = ["Setting", "check_setting_name"]

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from typing_extensions import final

from .exceptions import ConstructorError, InvalidSettingNameError

if TYPE_CHECKING:
    from .settings import Settings

_ALLOWED_SETTINGS_PATTERN = re.compile(r"^(?!__)(?:[a-zA-Z]\w*|_\w+)$")


def check_setting_name(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"Expected str, got {type(name).__qualname__}")
    if not name:
        raise InvalidSettingNameError(name, "Setting name must not be empty")
    if not _ALLOWED_SETTINGS_PATTERN.match(name) or not name.isidentifier():
        if name.startswith("__"):
            raise InvalidSettingNameError(name, "Only one leading underscore is accepted")
        raise InvalidSettingNameError(name, "Forbidden setting name format")
    return name


@final
@dataclass(frozen=True, eq=False, slots=True, kw_only=True)
class Setting:
    """
    Immutable definition of one configurable value.

    'default' is either a plain value or a zero-argument callable producing it.
    'constructor' receives the default, or any value given to Config.set(),
    and returns the value actually stored.
    """

    name: str
    default: Any = None
    constructor: Callable[[Any], Any] | None = None
    reader: bool = False
    nested: Settings | None = None

    def __post_init__(self) -> None:
        check_setting_name(self.name)
        if self.constructor is not None and not callable(self.constructor):
            raise TypeError(f"{self.name!r}: constructor must be callable")
        object.__setattr__(self, "reader", bool(self.reader))

    def __repr__(self) -> str:
        if self.nested is not None:
            return f"{type(self).__name__}({self.name!r}, nested={list(self.nested.names())!r})"
        return f"{type(self).__name__}({self.name!r}, default={self.default!r})"

    @property
    def is_nested(self) -> bool:
        return self.nested is not None

    def evaluate(self) -> Any:
        if self.nested is not None:
            raise TypeError(f"{self.name!r}: nested settings have no scalar default")
        default: Any = self.default
        if callable(default):
            try:
                default = default()
            except Exception as exc:
                raise ConstructorError(self.name, default, f"Default producer raised {type(exc).__name__}: {exc}") from exc
        return self.construct(default)

    def construct(self, value: Any) -> Any:
        constructor = self.constructor
        if constructor is None:
            return value
        try:
            return constructor(value)
        except Exception as exc:
            raise ConstructorError(self.name, value) from exc
