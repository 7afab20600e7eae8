# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""SettingNames module

A frozen ordered set of setting names, derived from an OrderedSet
implementation but without any mutation method.
"""

from __future__ import annotations

__all__ = ["SettingNames"]

from collections.abc import Sequence, Set
from typing import Any, Iterable, Iterator, overload


class SettingNames(Set[str], Sequence[str]):
    """
    Immutable set of setting names which remembers the declaration order.

    Example:
        >>> SettingNames(["b", "a", "b"])
        SettingNames(['b', 'a'])
    """

    __slots__ = ("__items", "__map", "__hash")

    def __init__(self, names: Iterable[str] = (), /) -> None:
        index_map: dict[str, int] = {}
        for name in names:
            index_map.setdefault(name, len(index_map))
        self.__map: dict[str, int] = index_map
        self.__items: tuple[str, ...] = tuple(index_map)
        self.__hash: int | None = None

    @classmethod
    def _from_iterable(cls, it: Iterable[str]) -> SettingNames:
        return cls(it)

    @overload
    def __getitem__(self, index: int, /) -> str:
        ...

    @overload
    def __getitem__(self, index: slice, /) -> SettingNames:
        ...

    def __getitem__(self, index: int | slice, /) -> str | SettingNames:
        if isinstance(index, slice):
            return self._from_iterable(self.__items[index])
        return self.__items[index]

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        try:
            real_index = self.__map[value]
        except (KeyError, TypeError):
            raise ValueError(f"{value!r} not in set") from None
        if real_index not in range(len(self.__items))[start:stop]:
            raise ValueError(f"{value!r} not in set")
        return real_index

    def count(self, value: Any) -> int:
        return 1 if value in self else 0

    def __contains__(self, __x: object, /) -> bool:
        try:
            return __x in self.__map
        except TypeError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.__items)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self.__items)

    def __len__(self) -> int:
        return len(self.__items)

    def __repr__(self) -> str:
        if not self.__items:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({list(self.__items)!r})"

    def __eq__(self, other: Any) -> bool:
        """
        If `other` is a Sequence, then order is checked, otherwise it is ignored.

        Example:
            >>> SettingNames(["a", "b"]) == ["a", "b"]
            True
            >>> SettingNames(["a", "b"]) == ["b", "a"]
            False
            >>> SettingNames(["a", "b"]) == {"b", "a"}
            True
        """
        if isinstance(other, Sequence) and not isinstance(other, str):
            return list(self) == list(other)
        if isinstance(other, Set):
            return len(self) == len(other) and all(name in other for name in self)
        return NotImplemented

    def __hash__(self) -> int:
        if self.__hash is None:
            self.__hash = self._hash()
        return self.__hash
