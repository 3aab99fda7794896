"""
The included resources of a single document.

Resources are registered by identifier before they are serialized: the placeholder
registered first is promoted to the serialized content afterwards. An identifier that is
already registered (placeholder or promoted) is never serialized again, this is what
terminates cycles in the object graph.

A registry is created for every document and discarded afterwards.
"""
import jsonapi_doc
from .errors import RegistryError
from typing import Any, Dict, Iterator, List, NamedTuple, Optional


class ResourceIdentifier(NamedTuple):
    """
    JSON:API resource identifier, ids are strings according to the jsonapi schema
    """

    type: str
    id: str

    @classmethod
    def create(cls, type_: Any, id_: Any) -> "ResourceIdentifier":
        return cls(str(type_), str(id_))

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "id": self.id}


class IncludedEntry:
    """
    Registry slot: a placeholder until `content` is set by the registry
    """

    __slots__ = ("identifier", "content")

    def __init__(self, identifier: ResourceIdentifier) -> None:
        self.identifier = identifier
        self.content = None

    @property
    def promoted(self) -> bool:
        return self.content is not None

    def __repr__(self) -> str:
        state = "promoted" if self.promoted else "placeholder"
        return f"<IncludedEntry {self.identifier.type}:{self.identifier.id} ({state})>"


class IncludedResourceRegistry:
    """
    Ordered set of included resources, keyed by ResourceIdentifier
    """

    def __init__(self) -> None:
        self._entries: Dict[ResourceIdentifier, IncludedEntry] = {}

    def __contains__(self, identifier: ResourceIdentifier) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IncludedEntry]:
        return iter(self._entries.values())

    def get(self, identifier: ResourceIdentifier) -> Optional[IncludedEntry]:
        return self._entries.get(identifier)

    def add_placeholder(self, identifier: ResourceIdentifier) -> bool:
        """
        :param identifier: identifier of the resource that will be included
        :return: False if the identifier was registered already
        """
        if identifier in self._entries:
            return False
        self._entries[identifier] = IncludedEntry(identifier)
        return True

    def promote(self, identifier: ResourceIdentifier, content: Dict[str, Any]) -> IncludedEntry:
        """
        Replace the placeholder of `identifier` with the serialized resource
        :param identifier: registered identifier
        :param content: serialized resource object
        :return: the promoted entry
        """
        entry = self._entries.get(identifier)
        if entry is None:
            raise RegistryError(f"{identifier.type}:{identifier.id} is not registered")
        if entry.promoted:
            raise RegistryError(f"{identifier.type}:{identifier.id} has been promoted already")
        if content is None:
            raise RegistryError(f"{identifier.type}:{identifier.id} can't be promoted to None")
        entry.content = content
        jsonapi_doc.log.debug(f"Included {identifier.type}:{identifier.id}")
        return entry

    def included(self) -> List[Dict[str, Any]]:
        """
        :return: the promoted resources, in registration order
        """
        return [entry.content for entry in self._entries.values() if entry.promoted]
