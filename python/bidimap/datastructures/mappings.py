###########################################################################
###########################################################################
## Module containing bidirectional mapping structures.                   ##
##                                                                       ##
## Copyright (C) 2022 Oliver Michael Kamperis                            ##
##                                                                       ##
## This program is free software: you can redistribute it and/or modify  ##
## it under the terms of the GNU General Public License as published by  ##
## the Free Software Foundation, either version 3 of the License, or     ##
## any later version.                                                    ##
##                                                                       ##
## This program is distributed in the hope that it will be useful,       ##
## but WITHOUT ANY WARRANTY; without even the implied warranty of        ##
## MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the          ##
## GNU General Public License for more details.                          ##
##                                                                       ##
## You should have received a copy of the GNU General Public License     ##
## along with this program. If not, see <https://www.gnu.org/licenses/>. ##
###########################################################################
###########################################################################

"""Module containing bidirectional mapping structures."""

import collections.abc
import copy
import logging
import types
from typing import (Any, Generic, Hashable, Iterable, Iterator, Mapping,
                    NamedTuple, TypeAlias, TypeVar, final, overload)

from typing_extensions import override

from bidimap.datastructures.views import (LeftValuesView, PairsView,
                                          RightValuesView)

__copyright__ = "Copyright (C) 2022 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "AssociationConflictError",
    "StalePositionError",
    "AssociationResult",
    "MapPosition",
    "BidirectionalMap"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


LT = TypeVar("LT", bound=Hashable)
RT = TypeVar("RT", bound=Hashable)
DT = TypeVar("DT")
BidirectionalMapInit: TypeAlias = Mapping[LT, RT] | Iterable[tuple[LT, RT]]

# Sentinel for missing entries, None is a valid left or right value.
_ABSENT: Any = object()


class AssociationResult(NamedTuple, Generic[LT, RT]):
    """
    The associations evicted by associating a (left, right) pair.

    Items
    -----
    `previous_right: RT | None` - The right value the left value was
    associated with, or None if it was not associated.

    `previous_left: LT | None` - The left value the right value was
    associated with, or None if it was not associated.
    """

    previous_right: RT | None
    previous_left: LT | None


class AssociationConflictError(ValueError):
    """
    Raised when constructing a bidirectional map from pairs in which a left
    or right value appears more than once.
    """

    def __init__(
        self,
        left: Hashable,
        right: Hashable,
        previous: AssociationResult
    ) -> None:
        """
        Create a new association conflict error.

        `left: Hashable` - The left value of the conflicting pair.

        `right: Hashable` - The right value of the conflicting pair.

        `previous: AssociationResult` - The associations that the conflicting
        pair would have evicted.
        """
        super().__init__(f"Cannot associate {left!r} with {right!r}, the "
                         "left or right value is already associated; "
                         f"{previous}.")
        self.left = left
        self.right = right
        self.previous = previous


class StalePositionError(LookupError):
    """
    Raised when a position is used after the map that issued it was mutated,
    or with a map that did not issue it.
    """


@final
class MapPosition(Generic[LT]):
    """
    An opaque handle to the location of a pair in a bidirectional map.

    Positions are only valid for the map that issued them, and only until
    that map is next mutated.
    """

    __slots__ = {
        "__left": "The left value of the pair at this position.",
        "__generation": "The mutation count of the map when issued.",
        "__owner": "The identity token of the map that issued the position."
    }

    def __init__(self, left: LT, generation: int, owner: object) -> None:
        """Create a new map position."""
        self.__left: LT = left
        self.__generation: int = generation
        self.__owner: object = owner

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(left={self.__left!r}, "
                f"generation={self.__generation})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapPosition):
            return NotImplemented
        return (self.__owner is other.__owner
                and self.__generation == other.__generation
                and self.__left == other.__left)

    def __hash__(self) -> int:
        return hash((self.__left, self.__generation, id(self.__owner)))

    @property
    def left(self) -> LT:
        """Get the left value of the pair at this position."""
        return self.__left

    @property
    def generation(self) -> int:
        """Get the mutation count of the map when this position was issued."""
        return self.__generation

    def issued_by(self, owner: object, generation: int) -> bool:
        """
        Check whether this position was issued by the given owner at the given
        generation.
        """
        return self.__owner is owner and self.__generation == generation


@final
class BidirectionalMap(collections.abc.Collection, Generic[LT, RT]):
    """
    Class defining a bidirectional (one-to-one) mapping type.

    A bidirectional map associates values of two types, called left and right
    values, such that each left value is associated with at most one right
    value and vice versa. Both sides can be used to look up the other in
    constant time, since the map keeps a forward (left to right) and a
    backward (right to left) index that are always updated together.

    Associating a pair evicts any previous association of either value, so
    that the mapping stays one-to-one. Lookups and removals of absent values
    return None instead of raising.

    The map is a collection of (left, right) pairs, iterated in insertion
    order of the forward index. Re-associating a value removes its old pair
    and inserts a new one, so the new pair moves to the end of the order.

    Maps are mutable and have reference semantics like other Python
    containers, use `copy()` to get an independent map.

    Example Usage
    -------------
    ```
    >>> from bidimap.datastructures.mappings import BidirectionalMap
    >>> browsers = BidirectionalMap({"Apple": "Safari", "Google": "Chrome"})
    >>> browsers
    BidirectionalMap({'Apple': 'Safari', 'Google': 'Chrome'})

    # Look up either side.
    >>> browsers.get_right("Apple")
    'Safari'
    >>> browsers.get_left("Chrome")
    'Google'

    # Re-associating evicts the old pairs of both values.
    >>> browsers.associate_values("Apple", "Chrome")
    AssociationResult(previous_right='Safari', previous_left='Google')
    >>> browsers
    BidirectionalMap({'Apple': 'Chrome'})
    ```
    """

    __BIMAP_LOGGER = logging.getLogger("BidirectionalMap")

    __slots__ = {
        "__forward": "The forward index, mapping left to right values.",
        "__backward": "The backward index, mapping right to left values.",
        "__generation": "The number of mutations of the map.",
        "__token": "The identity token given to issued positions.",
        "__debug": "Whether to log debug messages."
    }

    @overload
    def __init__(self, *, debug: bool = False) -> None:
        """
        Create a new empty bidirectional map.

        For example:
        ```
        >>> bimap = BidirectionalMap()
        >>> bimap
        BidirectionalMap({})
        ```
        """
        ...

    @overload
    def __init__(
        self,
        mapping: Mapping[LT, RT], /, *,
        debug: bool = False
    ) -> None:
        """
        Create a new bidirectional map from a mapping object's (left, right)
        pairs.

        For example:
        ```
        >>> bimap = BidirectionalMap({"one": 1, "two": 2})
        >>> bimap
        BidirectionalMap({'one': 1, 'two': 2})
        ```
        """
        ...

    @overload
    def __init__(
        self,
        iterable: Iterable[tuple[LT, RT]], /, *,
        debug: bool = False
    ) -> None:
        """
        Create a new bidirectional map from an iterable of tuples defining
        (left, right) pairs.

        For example:
        ```
        >>> bimap = BidirectionalMap([("one", 1), ("two", 2)])
        >>> bimap
        BidirectionalMap({'one': 1, 'two': 2})
        ```
        """
        ...

    @overload
    def __init__(
        self: "BidirectionalMap[str, RT]", *,
        debug: bool = False,
        **kwargs: RT
    ) -> None:
        """
        Create a new bidirectional map with the left to right pairs given in
        the keyword argument list. The name `debug` is reserved.

        For example:
        ```
        >>> bimap = BidirectionalMap(one=1, two=2)
        >>> bimap
        BidirectionalMap({'one': 1, 'two': 2})
        ```
        """
        ...

    def __init__(  # type: ignore
        self,
        init: BidirectionalMapInit | None = None, /, *,
        debug: bool = False,
        **kwargs: RT
    ) -> None:
        """
        Create a new bidirectional map.

        Pairs are inserted in the order given. If a left or right value
        appears in more than one pair, an `AssociationConflictError` is raised
        and no map is created. See `from_pairs()` for a construction that
        returns None instead.
        """
        self.__forward: dict[LT, RT] = {}
        self.__backward: dict[RT, LT] = {}
        self.__generation: int = 0
        self.__token: object = object()
        self.__debug: bool = debug

        pairs: Iterable[tuple[Any, Any]]
        if init is None:
            pairs = kwargs.items()
        elif isinstance(init, Mapping):
            pairs = [*init.items(), *kwargs.items()]
        else:
            pairs = [*init, *kwargs.items()]
        for left, right in pairs:
            if left in self.__forward or right in self.__backward:
                raise AssociationConflictError(
                    left, right,
                    AssociationResult(self.__forward.get(left),
                                      self.__backward.get(right))
                )
            self.__forward[left] = right
            self.__backward[right] = left

        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Created bidirectional map with %s pairs.",
                len(self.__forward)
            )

    @classmethod
    def from_pairs(
        cls,
        pairs: BidirectionalMapInit, /, *,
        debug: bool = False
    ) -> "BidirectionalMap[LT, RT] | None":
        """
        Create a new bidirectional map from a mapping or an iterable of
        (left, right) pairs, or return None if a left or right value appears
        in more than one pair.

        For example:
        ```
        >>> BidirectionalMap.from_pairs([("a", 1), ("b", 2)])
        BidirectionalMap({'a': 1, 'b': 2})
        >>> BidirectionalMap.from_pairs([("a", 1), ("b", 1)]) is None
        True
        ```
        """
        try:
            return cls(pairs, debug=debug)
        except AssociationConflictError as error:
            cls.__BIMAP_LOGGER.debug(
                "Rejected construction of bidirectional map: %s", error
            )
            return None

    def __with_indices(
        self,
        forward: dict[Any, Any],
        backward: dict[Any, Any]
    ) -> "BidirectionalMap[Any, Any]":
        """
        Create a new bidirectional map that owns the given indices, with the
        same debug setting as this map.
        """
        bimap: BidirectionalMap[Any, Any] = BidirectionalMap()
        bimap.__forward = forward
        bimap.__backward = backward
        bimap.__debug = self.__debug
        if bimap.__debug:
            self.__BIMAP_LOGGER.debug(
                "Created bidirectional map with %s pairs.",
                len(bimap.__forward)
            )
        return bimap

    def copy(self) -> "BidirectionalMap[LT, RT]":
        """
        Get a copy of the bidirectional map.

        The copy has its own indices, so mutating either map does not affect
        the other. The left and right values themselves are not copied.
        """
        return self.__with_indices(self.__forward.copy(),
                                   self.__backward.copy())

    def __copy__(self) -> "BidirectionalMap[LT, RT]":
        """Get a shallow copy of the bidirectional map."""
        return self.copy()

    def __deepcopy__(
        self,
        memo: dict[int, Any]
    ) -> "BidirectionalMap[LT, RT]":
        """Get a deep copy of the bidirectional map and its values."""
        forward: dict[LT, RT] = copy.deepcopy(self.__forward, memo)
        backward: dict[RT, LT] = {
            right: left
            for left, right in forward.items()
        }
        bimap = self.__with_indices(forward, backward)
        memo[id(self)] = bimap
        return bimap

    def inverse(self) -> "BidirectionalMap[RT, LT]":
        """
        Get a copy of the bidirectional map with the left and right sides
        swapped.

        For example:
        ```
        >>> BidirectionalMap({"a": 1, "b": 2}).inverse()
        BidirectionalMap({1: 'a', 2: 'b'})
        ```
        """
        return self.__with_indices(self.__backward.copy(),
                                   self.__forward.copy())

    def __repr__(self) -> str:
        """
        Get an instantiable string representation of the bidirectional map.
        """
        return f"{self.__class__.__name__}({self.__forward!r})"

    def __str__(self) -> str:
        """Get a readable string representation of the bidirectional map."""
        pairs = ", ".join(
            f"{left!r} <-> {right!r}"
            for left, right in self.__forward.items()
        )
        return f"{{{pairs}}}"

    def __eq__(self, other: object) -> bool:
        """
        Check whether two bidirectional maps hold the same pairs, regardless
        of order.
        """
        if not isinstance(other, BidirectionalMap):
            return NotImplemented
        return self.__forward == other.__forward

    __hash__ = None  # type: ignore

    @override
    def __len__(self) -> int:
        """Get the number of pairs in the bidirectional map."""
        return len(self.__forward)

    @override
    def __iter__(self) -> Iterator[tuple[LT, RT]]:
        """Iterate over the (left, right) pairs in insertion order."""
        return iter(self.__forward.items())

    @override
    def __contains__(self, pair: object, /) -> bool:
        """Check whether the given (left, right) pair is in the map."""
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        left, right = pair
        return (left in self.__forward
                and self.__backward.get(right, _ABSENT) == left)

    @property
    def is_empty(self) -> bool:
        """Whether the bidirectional map contains no pairs."""
        return not self.__forward

    @property
    def forward(self) -> types.MappingProxyType[LT, RT]:
        """Get the forward (left to right) index as a read-only mapping."""
        return types.MappingProxyType(self.__forward)

    @property
    def backward(self) -> types.MappingProxyType[RT, LT]:
        """Get the backward (right to left) index as a read-only mapping."""
        return types.MappingProxyType(self.__backward)

    @property
    def left_values(self) -> LeftValuesView[LT]:
        """
        Get a live view of the left values of the map.

        The view reflects later changes to the map, it is not a snapshot.
        Mutating the map whilst iterating over the view raises a
        RuntimeError.
        """
        return LeftValuesView(self)

    @property
    def right_values(self) -> RightValuesView[RT]:
        """
        Get a live view of the right values of the map.

        Right values are iterated in the same order as `left_values`, such
        that the i-th right value is associated with the i-th left value.
        """
        return RightValuesView(self)

    @property
    def pairs(self) -> PairsView[LT, RT]:
        """Get a live view of the (left, right) pairs of the map."""
        return PairsView(self)

    def has_left(self, left: LT, /) -> bool:
        """Check whether the given left value is associated."""
        return left in self.__forward

    def has_right(self, right: RT, /) -> bool:
        """Check whether the given right value is associated."""
        return right in self.__backward

    @overload
    def get_right(self, left: LT, /) -> RT | None:
        ...

    @overload
    def get_right(self, left: LT, default: DT, /) -> RT | DT:
        ...

    def get_right(
        self,
        left: LT,
        default: DT | None = None, /
    ) -> RT | DT | None:
        """
        Get the right value associated with the given left value, or the
        default value (None if not given) if it is not associated.
        """
        return self.__forward.get(left, default)

    @overload
    def get_left(self, right: RT, /) -> LT | None:
        ...

    @overload
    def get_left(self, right: RT, default: DT, /) -> LT | DT:
        ...

    def get_left(
        self,
        right: RT,
        default: DT | None = None, /
    ) -> LT | DT | None:
        """
        Get the left value associated with the given right value, or the
        default value (None if not given) if it is not associated.
        """
        return self.__backward.get(right, default)

    def associate_values(
        self,
        left: LT,
        right: RT, /
    ) -> AssociationResult[LT, RT]:
        """
        Associate a left value with a right value.

        Any previous association of either value is removed from the map
        first. This can evict two different pairs, if the left and right
        values were both associated with other values.

        Returns an `AssociationResult` holding the right value the left value
        was previously associated with and the left value the right value
        was previously associated with, either being None if there was no
        such association.

        For example:
        ```
        >>> bimap = BidirectionalMap({"A": "X", "B": "Y"})
        >>> bimap.associate_values("A", "Y")
        AssociationResult(previous_right='X', previous_left='B')
        >>> bimap
        BidirectionalMap({'A': 'Y'})
        ```
        """
        previous_right: RT = self.__forward.get(left, _ABSENT)
        previous_left: LT = self.__backward.get(right, _ABSENT)
        if previous_right is not _ABSENT:
            del self.__forward[left]
            del self.__backward[previous_right]
        # If the pair already existed it was removed above.
        if previous_left is not _ABSENT and right in self.__backward:
            del self.__backward[right]
            del self.__forward[previous_left]
        self.__forward[left] = right
        self.__backward[right] = left
        self.__generation += 1

        result = AssociationResult(
            None if previous_right is _ABSENT else previous_right,
            None if previous_left is _ABSENT else previous_left
        )
        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Associated %r with %r, evicted associations: %s",
                left, right, result
            )
        return result

    def update(
        self,
        pairs: BidirectionalMapInit | None = None, /,
        **kwargs: RT
    ) -> None:
        """
        Associate all the given (left, right) pairs in order.

        Unlike construction, conflicting pairs do not raise an error, later
        pairs evict the associations of earlier ones.
        """
        if pairs is not None:
            if isinstance(pairs, Mapping):
                pairs = pairs.items()
            for left, right in pairs:
                self.associate_values(left, right)
        for left, right in kwargs.items():
            self.associate_values(left, right)  # type: ignore

    def disassociate_left(self, left: LT, /) -> RT | None:
        """
        Remove the association of the given left value, returning the right
        value it was associated with, or None if it was not associated.
        """
        right: RT = self.__forward.pop(left, _ABSENT)
        if right is _ABSENT:
            return None
        del self.__backward[right]
        self.__generation += 1
        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Disassociated left value %r from %r.", left, right
            )
        return right

    def disassociate_right(self, right: RT, /) -> LT | None:
        """
        Remove the association of the given right value, returning the left
        value it was associated with, or None if it was not associated.
        """
        left: LT = self.__backward.pop(right, _ABSENT)
        if left is _ABSENT:
            return None
        del self.__forward[left]
        self.__generation += 1
        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Disassociated right value %r from %r.", right, left
            )
        return left

    def disassociate_all(self, keep_capacity: bool = False) -> None:
        """
        Remove all associations from the map.

        If `keep_capacity` is True, the existing indices are emptied in place,
        otherwise they are emptied and then replaced by new ones. This has no
        effect on the behaviour of the map or its views, in both cases an
        iteration over a view that is in progress raises a RuntimeError.
        """
        # Running iterators hold the old indices, they must see the change.
        self.__forward.clear()
        self.__backward.clear()
        if not keep_capacity:
            self.__forward = {}
            self.__backward = {}
        self.__generation += 1
        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Disassociated all values, keep_capacity=%s.", keep_capacity
            )

    def __position(self, left: LT) -> MapPosition[LT]:
        """Issue a position for the pair of the given left value."""
        return MapPosition(left, self.__generation, self.__token)

    def __check_position(self, position: MapPosition[LT]) -> None:
        """Raise an error if the position is not valid for this map."""
        if not position.issued_by(self.__token, self.__generation):
            raise StalePositionError(
                f"Position {position!r} is not valid for this map; "
                f"the map has been mutated since it was issued, or it was "
                f"issued by another map."
            )

    def position_of_left(self, left: LT, /) -> MapPosition[LT] | None:
        """
        Get the position of the pair of the given left value, or None if it is
        not associated.

        The position becomes invalid when the map is next mutated.
        """
        if left not in self.__forward:
            return None
        return self.__position(left)

    def position_of_right(self, right: RT, /) -> MapPosition[LT] | None:
        """
        Get the position of the pair of the given right value, or None if it
        is not associated.

        The position becomes invalid when the map is next mutated.
        """
        left: LT = self.__backward.get(right, _ABSENT)
        if left is _ABSENT:
            return None
        return self.__position(left)

    @property
    def first_position(self) -> MapPosition[LT] | None:
        """
        Get the position of the first pair, or None if the map is empty.

        Walking the map with `first_position` and `position_after` takes
        quadratic time, use `iter()` to visit every pair.
        """
        for left in self.__forward:
            return self.__position(left)
        return None

    def position_after(
        self,
        position: MapPosition[LT], /
    ) -> MapPosition[LT] | None:
        """
        Get the position of the pair following the pair at the given position
        in iteration order, or None if it is the last pair.

        This scans the forward index up to the given position, so it takes
        linear time in the size of the map.

        Raises a `StalePositionError` if the position is no longer valid.
        """
        self.__check_position(position)
        lefts = iter(self.__forward)
        for left in lefts:
            if left == position.left:
                next_left: LT = next(lefts, _ABSENT)
                if next_left is _ABSENT:
                    return None
                return self.__position(next_left)
        return None

    def pair_at(self, position: MapPosition[LT], /) -> tuple[LT, RT]:
        """
        Get the (left, right) pair at the given position.

        Raises a `StalePositionError` if the position is no longer valid.
        """
        self.__check_position(position)
        return (position.left, self.__forward[position.left])

    def disassociate_at(self, position: MapPosition[LT], /) -> tuple[LT, RT]:
        """
        Remove the association at the given position, returning the removed
        (left, right) pair.

        Raises a `StalePositionError` if the position is no longer valid.
        """
        self.__check_position(position)
        left: LT = position.left
        right: RT = self.__forward.pop(left)
        del self.__backward[right]
        self.__generation += 1
        if self.__debug:
            self.__BIMAP_LOGGER.debug(
                "Disassociated pair (%r, %r) at position.", left, right
            )
        return (left, right)

    def pop_first(self) -> tuple[LT, RT] | None:
        """
        Remove and return the first (left, right) pair in iteration order, or
        return None if the map is empty.
        """
        position = self.first_position
        if position is None:
            return None
        return self.disassociate_at(position)


def __main() -> None:
    """Execute the main routine."""
    import sys  # pylint: disable=import-outside-toplevel

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stdout
    )

    browsers = BidirectionalMap({"Apple": "Safari",
                                 "Google": "Chrome",
                                 "Microsoft": "Edge",
                                 "Mozilla": "Firefox"},
                                debug=True)
    print(browsers)
    print(browsers.get_right("Apple"))
    print(browsers.get_left("Edge"))
    print(list(browsers.left_values))
    print(list(browsers.right_values))
    print(browsers.associate_values("Apple", "Chrome"))
    print(browsers)
    print(browsers.disassociate_left("Microsoft"))
    print(browsers.pop_first())
    print(BidirectionalMap.from_pairs([("Apple", "Safari"),
                                       ("Apple", "WebKit")]))
    browsers.disassociate_all()
    print(browsers.is_empty)


if __name__ == "__main__":
    __main()
