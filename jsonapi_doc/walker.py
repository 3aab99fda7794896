#
# Reading and classifying relationship values
#
from collections.abc import Iterable, Mapping, Sized
from .accessors import PropertyAccessor
from .errors import PropertyAccessError
from .metadata import RelationshipDescriptor, ResourceMetadata
from typing import Any, Iterator, List, NamedTuple, Optional, Tuple, Union


class Empty:
    """
    Relationship without data: None, an absent property or an empty collection
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty()


class Singular(NamedTuple):
    """
    to-one relationship value
    """

    value: Any


class Collection(NamedTuple):
    """
    to-many relationship value, in iteration order
    """

    values: List[Any]


Classification = Union[Empty, Singular, Collection]


def is_collection(value: Any) -> bool:
    """
    :param value: relationship value
    :return: True if the value can be iterated and counted (lists, sqlalchemy InstrumentedList
             and dynamic AppenderQuery, ...). Strings, bytes and mappings are not collections.
    """
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    if not isinstance(value, Iterable):
        return False
    return isinstance(value, Sized) or callable(getattr(value, "count", None))


def count(value: Any) -> int:
    if isinstance(value, Sized):
        return len(value)
    return value.count()


class ObjectGraphWalker:
    """
    Reads the declared relationships of an object and classifies their values
    """

    def __init__(self, accessor: Optional[PropertyAccessor] = None) -> None:
        self.accessor = accessor or PropertyAccessor()

    def classify(self, obj: Any, descriptor: RelationshipDescriptor) -> Classification:
        """
        :param obj: object owning the relationship
        :param descriptor: relationship to read
        :return: EMPTY, Singular(related) or Collection([related, ...])

        Falsy values other than None (0, False, "") are not considered empty, they're Singular
        like any other value.
        """
        try:
            value = self.accessor.get_value(obj, descriptor.name)
        except PropertyAccessError:
            return EMPTY
        if value is None:
            return EMPTY
        if is_collection(value):
            if count(value) == 0:
                return EMPTY
            return Collection(list(value))
        return Singular(value)

    def walk(self, obj: Any, metadata: ResourceMetadata) -> Iterator[Tuple[RelationshipDescriptor, Classification]]:
        """
        :param obj: object owning the relationships
        :param metadata: resource metadata of the object
        :return: (descriptor, Singular | Collection) for the non-empty relationships, in declaration order
        """
        for descriptor in metadata.relationships:
            related = self.classify(obj, descriptor)
            if related is EMPTY:
                continue
            yield descriptor, related
