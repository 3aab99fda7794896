#
# Relationship data: related objects are referenced by their resource identifier,
# related objects of relationships that are included by default are registered and serialized
# in the included resources registry.
#
import jsonapi_doc
from .accessors import get_id
from .errors import MissingIdError
from .metadata import MetadataResolver, RelationshipDescriptor
from .registry import IncludedResourceRegistry, ResourceIdentifier
from typing import Any, Callable, Dict, Iterable, List, Optional

# relationship values of these types can't be resources
SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


class RelationshipEncoder:
    """
    :param resolver: MetadataResolver used to find the type of the related objects
    :param id_getter: returns the id of a related object, raises MissingIdError if it has none
    """

    def __init__(self, resolver: MetadataResolver, id_getter: Callable = get_id) -> None:
        self.resolver = resolver
        self.id_getter = id_getter

    def identify(self, related: Any) -> Optional[ResourceIdentifier]:
        """
        :param related: related object
        :return: the resource identifier, None if the object type has no metadata
        """
        if isinstance(related, SCALAR_TYPES):
            raise MissingIdError(f"Related {type(related).__name__} value {related!r} is not a resource object")
        metadata = self.resolver.resolve(type(related))
        if metadata is None:
            jsonapi_doc.log.debug(f"Skipping related {type(related).__name__} object, no resource metadata")
            return None
        return ResourceIdentifier.create(metadata.type, self.id_getter(related))

    def encode(
        self,
        related: Any,
        descriptor: RelationshipDescriptor,
        registry: IncludedResourceRegistry,
        serialize_full: Callable[[Any], Dict[str, Any]],
        include: bool = True,
    ) -> Optional[ResourceIdentifier]:
        """
        :param related: related object
        :param descriptor: the relationship
        :param registry: included resources of the document
        :param serialize_full: serializes the related object when it has to be included
        :param include: False to disable inclusion, eg. when the maximum depth has been reached
        :return: the resource identifier of the related object or None if it has to be skipped
        """
        identifier = self.identify(related)
        if identifier is None:
            return None
        if not descriptor.include_by_default:
            return identifier
        if include:
            self._include(identifier, related, registry, serialize_full)
        elif identifier not in registry:
            jsonapi_doc.log.warning(f"Maximum include depth reached, {identifier.type}:{identifier.id} will not be included")
        return identifier

    def encode_many(
        self,
        related_items: Iterable[Any],
        descriptor: RelationshipDescriptor,
        registry: IncludedResourceRegistry,
        serialize_full: Callable[[Any], Dict[str, Any]],
        include: bool = True,
    ) -> List[ResourceIdentifier]:
        """
        :return: the resource identifiers of the related objects that have metadata, in iteration order
        """
        result = []
        for related in related_items:
            identifier = self.encode(related, descriptor, registry, serialize_full, include)
            if identifier is not None:
                result.append(identifier)
        return result

    @staticmethod
    def _include(identifier: ResourceIdentifier, related: Any, registry: IncludedResourceRegistry, serialize_full: Callable) -> None:
        # the placeholder has to be registered before serializing so a cycle finds it
        if not registry.add_placeholder(identifier):
            jsonapi_doc.log.debug(f"{identifier.type}:{identifier.id} is included already")
            return
        registry.promote(identifier, serialize_full(related))
