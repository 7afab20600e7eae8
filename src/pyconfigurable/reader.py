# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Setting readers module"""

from __future__ import annotations

__all__ = ["AttributeReaderRegistrar", "ReaderRegistrar", "SettingReader"]

import inspect
import warnings
from typing import Any, Callable, Iterable, NoReturn, Protocol, overload, runtime_checkable

from loguru import logger
from typing_extensions import final

from .exceptions import ReaderShadowingWarning, SettingDefinitionError

_Resolver = Callable[[Any], Any]


def _external_stacklevel() -> int:
    # Level of the first frame outside this package, relative to the caller of this function
    package: str = __name__.partition(".")[0]
    frame = inspect.currentframe()
    frame = frame.f_back if frame is not None else None
    stacklevel = 1
    while frame is not None and frame.f_globals.get("__name__", "").partition(".")[0] == package:
        frame = frame.f_back
        stacklevel += 1
    return stacklevel


@runtime_checkable
class ReaderRegistrar(Protocol):
    def define_reader(self, owner: Any, name: str, resolver: _Resolver, /) -> None:
        """
        Expose 'name' on 'owner'.

        'resolver' is called with the object the reader is accessed from
        (the owner, one of its subclasses or one of their instances) and
        returns the setting value.
        """
        ...


@final
class SettingReader:
    __slots__ = ("__name", "__owner", "__resolver", "__doc__")

    def __init__(self, resolver: _Resolver) -> None:
        self.__resolver: _Resolver = resolver
        self.__doc__: str | None = None

    def __set_name__(self, owner: type, name: str, /) -> None:
        self.__owner: type = owner
        self.__name: str = name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.__owner.__qualname__}.{self.__name}>"

    @overload
    def __get__(self, obj: None, objtype: type, /) -> Any:
        ...

    @overload
    def __get__(self, obj: object, objtype: type | None = None, /) -> Any:
        ...

    def __get__(self, obj: object, objtype: type | None = None, /) -> Any:
        if obj is None:
            if objtype is None:
                raise TypeError("__get__(None, None) is invalid")
            return self.__resolver(objtype)
        return self.__resolver(obj)

    def __set__(self, obj: object, value: Any, /) -> NoReturn:
        raise AttributeError(f"{self.__name!r} is a read-only setting reader, use config.set() instead")

    def __delete__(self, obj: object, /) -> NoReturn:
        raise AttributeError(f"{self.__name!r} is a read-only setting reader")

    @property
    def owner(self) -> type:
        return self.__owner

    @property
    def name(self) -> str:
        return self.__name


@final
class AttributeReaderRegistrar:
    """
    Installs a SettingReader descriptor on the owner class.

    Names listed in 'reserved' are refused. Shadowing any other existing
    attribute is allowed but reported with a ReaderShadowingWarning.
    """

    __slots__ = ("__reserved",)

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self.__reserved: frozenset[str] = frozenset(reserved)

    def define_reader(self, owner: Any, name: str, resolver: _Resolver, /) -> None:
        if not isinstance(owner, type):
            raise TypeError(f"Readers can only be defined on classes, got {owner!r}")
        if name in self.__reserved:
            raise SettingDefinitionError(name, f"Cannot define a reader which overrides {owner.__qualname__}.{name}")
        existing: Any = inspect.getattr_static(owner, name, None)
        if existing is not None and not isinstance(existing, SettingReader):
            warnings.warn(
                f"Reader for setting {name!r} shadows {owner.__qualname__}.{name}",
                category=ReaderShadowingWarning,
                stacklevel=_external_stacklevel(),
            )
        reader = SettingReader(resolver)
        reader.__doc__ = f"Value of the {name!r} setting"
        setattr(owner, name, reader)
        reader.__set_name__(owner, name)
        logger.debug(f"Defined reader {owner.__qualname__}.{name}")

    @property
    def reserved(self) -> frozenset[str]:
        return self.__reserved
