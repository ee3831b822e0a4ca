###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""Module containing live view types over bidirectional mappings."""

import collections.abc
from typing import (Any, Generic, Hashable, Iterable, Iterator, Mapping,
                    Protocol, TypeVar, final)

from typing_extensions import override

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "SupportsBidirectionalIndices",
    "LeftValuesView",
    "RightValuesView",
    "PairsView"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


LT = TypeVar("LT", bound=Hashable)
RT = TypeVar("RT", bound=Hashable)


class SupportsBidirectionalIndices(Protocol[LT, RT]):
    """
    Protocol for objects exposing a forward (left to right) and a backward
    (right to left) index as read-only mappings.

    The views in this module read through this protocol every time they are
    accessed, so they observe the owner's indices even if the owner replaces
    them.
    """

    @property
    def forward(self) -> Mapping[LT, RT]:
        ...

    @property
    def backward(self) -> Mapping[RT, LT]:
        ...


@final
class LeftValuesView(collections.abc.Set, Generic[LT]):
    """
    Class defining a view of the left values of a bidirectional mapping.

    The values cannot be modified through the view, but the view will reflect
    changes made to the mapping by its owner. Iteration order is the order of
    the owner's forward index, and is the same as the order of the matching
    `RightValuesView`, such that the i-th left value is paired with the i-th
    right value.
    """

    __slots__ = {
        "__indices": "The indices being viewed."
    }

    def __init__(
        self,
        indices: SupportsBidirectionalIndices[LT, Any], /
    ) -> None:
        """Create a new left values view."""
        self.__indices: SupportsBidirectionalIndices[LT, Any] = indices

    def __repr__(self) -> str:
        """Get a string representation of the left values view."""
        return f"LeftValuesView({list(self.__indices.forward)!r})"

    @classmethod
    @override
    def _from_iterable(cls, iterable: Iterable[LT]) -> set[LT]:
        # Set operations cannot build a view, so they produce plain sets.
        return set(iterable)

    @override
    def __contains__(self, item: object, /) -> bool:
        """Check if a value is a left value of the mapping."""
        return item in self.__indices.forward

    @override
    def __iter__(self) -> Iterator[LT]:
        """Iterate over the left values in forward index order."""
        return iter(self.__indices.forward)

    def __reversed__(self) -> Iterator[LT]:
        return reversed(self.__indices.forward.keys())

    @override
    def __len__(self) -> int:
        """Get the number of left values."""
        return len(self.__indices.forward)


@final
class RightValuesView(collections.abc.Set, Generic[RT]):
    """
    Class defining a view of the right values of a bidirectional mapping.

    The values cannot be modified through the view, but the view will reflect
    changes made to the mapping by its owner. Right values are iterated in
    the order of the owner's forward index, membership is tested against the
    backward index.
    """

    __slots__ = {
        "__indices": "The indices being viewed."
    }

    def __init__(
        self,
        indices: SupportsBidirectionalIndices[Any, RT], /
    ) -> None:
        """Create a new right values view."""
        self.__indices: SupportsBidirectionalIndices[Any, RT] = indices

    def __repr__(self) -> str:
        """Get a string representation of the right values view."""
        return f"RightValuesView({list(self.__indices.forward.values())!r})"

    @classmethod
    @override
    def _from_iterable(cls, iterable: Iterable[RT]) -> set[RT]:
        return set(iterable)

    @override
    def __contains__(self, item: object, /) -> bool:
        """Check if a value is a right value of the mapping."""
        return item in self.__indices.backward

    @override
    def __iter__(self) -> Iterator[RT]:
        """Iterate over the right values in forward index order."""
        return iter(self.__indices.forward.values())

    def __reversed__(self) -> Iterator[RT]:
        return reversed(self.__indices.forward.values())

    @override
    def __len__(self) -> int:
        """Get the number of right values."""
        return len(self.__indices.backward)


@final
class PairsView(collections.abc.Set, Generic[LT, RT]):
    """
    Class defining a view of the (left, right) pairs of a bidirectional
    mapping.

    Behaves like the items view of a dictionary.
    """

    __slots__ = {
        "__indices": "The indices being viewed."
    }

    def __init__(
        self,
        indices: SupportsBidirectionalIndices[LT, RT], /
    ) -> None:
        """Create a new pairs view."""
        self.__indices: SupportsBidirectionalIndices[LT, RT] = indices

    def __repr__(self) -> str:
        """Get a string representation of the pairs view."""
        return f"PairsView({list(self.__indices.forward.items())!r})"

    @classmethod
    @override
    def _from_iterable(
        cls,
        iterable: Iterable[tuple[LT, RT]]
    ) -> set[tuple[LT, RT]]:
        return set(iterable)

    @override
    def __contains__(self, item: object, /) -> bool:
        """Check if a (left, right) pair is in the mapping."""
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        left, right = item
        forward = self.__indices.forward
        return left in forward and forward[left] == right

    @override
    def __iter__(self) -> Iterator[tuple[LT, RT]]:
        """Iterate over the pairs in forward index order."""
        return iter(self.__indices.forward.items())

    def __reversed__(self) -> Iterator[tuple[LT, RT]]:
        return reversed(self.__indices.forward.items())

    @override
    def __len__(self) -> int:
        """Get the number of pairs."""
        return len(self.__indices.forward)
