"""
JSON:API document assembly

    {
      "type": "people",
      "id": "1",
      "name": "Thomas",
      "relationships": {
        "books": {"data": [{"type": "books", "id": "10"}]}
      },
      "included": [
        {"type": "books", "id": "10", "title": "...", "relationships": {...}}
      ]
    }

Every object is serialized by `DocumentAssembler.serialize`: the attributes, the "type"
and the "relationships". Related objects of relationships that are included by default
are serialized recursively into the included resources registry of the document.
The registry is attached as "included" to the document root only.
"""
from .accessors import PropertyAccessor, get_id
from .attributes import AttributeSerializer
from .config import get_config, get_int_config
from .errors import UnknownResourceError
from .metadata import MetadataResolver, ResourceMetadata, default_resolver
from .naming import NamingStrategy, get_naming_strategy
from .registry import IncludedResourceRegistry
from .relationships import RelationshipEncoder
from .walker import Collection, ObjectGraphWalker
from typing import Any, Callable, Dict, Iterable, Iterator, Optional


class ResourceObject:
    """
    Ordered resource object output, keys keep their insertion order unless prepended
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data = dict(data or {})

    def prepend(self, key: str, value: Any) -> None:
        """
        Set `key` as the first key of the resource object
        """
        data = {key: value}
        data.update((k, v) for k, v in self._data.items() if k != key)
        self._data = data

    def add(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


class AssemblyContext:
    """
    State of a single document assembly: the included resources and the current include depth.
    A new context is created for every document.
    """

    def __init__(self, max_depth: int) -> None:
        self.registry = IncludedResourceRegistry()
        self.max_depth = max_depth
        self.depth = 0

    @property
    def can_include(self) -> bool:
        return self.depth < self.max_depth


class DocumentAssembler:
    """
    Assembles JSON:API documents.

    :param resolver: MetadataResolver, defaults to `default_resolver`
    :param naming_strategy: NamingStrategy for the relationship (and default attribute) keys,
                            defaults to the NAMING_STRATEGY config
    :param attribute_serializer: object with a `serialize(obj, metadata)` method returning the attribute dict
    :param accessor: PropertyAccessor used to read the relationships
    :param id_getter: returns the id of an object
    :param max_depth: maximum include depth, defaults to the MAX_INCLUDE_DEPTH config
    """

    def __init__(
        self,
        resolver: Optional[MetadataResolver] = None,
        naming_strategy: Optional[NamingStrategy] = None,
        attribute_serializer: Any = None,
        accessor: Optional[PropertyAccessor] = None,
        id_getter: Callable = get_id,
        max_depth: Optional[int] = None,
    ) -> None:
        self.resolver = resolver or default_resolver
        self.naming_strategy = naming_strategy or get_naming_strategy(get_config("NAMING_STRATEGY"))
        self.attribute_serializer = attribute_serializer or AttributeSerializer(self.naming_strategy, id_getter)
        self.walker = ObjectGraphWalker(accessor)
        self.encoder = RelationshipEncoder(self.resolver, id_getter)
        self.max_depth = max_depth

    def new_context(self) -> AssemblyContext:
        max_depth = self.max_depth if self.max_depth is not None else get_int_config("MAX_INCLUDE_DEPTH", 32)
        return AssemblyContext(max_depth)

    def assemble(self, obj: Any) -> Dict[str, Any]:
        """
        :param obj: primary resource
        :return: the document: the serialized resource with the "included" resources
        """
        context = self.new_context()
        document = self.serialize(obj, context)
        included = context.registry.included()
        if included:
            document.add("included", included)
        return document.to_dict()

    def assemble_many(self, objects: Iterable[Any]) -> Dict[str, Any]:
        """
        :param objects: primary resources
        :return: {"data": [...], "included": [...]}, the included resources are shared by all objects
        """
        context = self.new_context()
        document = {"data": [self.serialize(obj, context).to_dict() for obj in objects]}
        included = context.registry.included()
        if included:
            document["included"] = included
        return document

    def serialize(self, obj: Any, context: AssemblyContext) -> ResourceObject:
        """
        Serialize a single object, without "included"
        :param obj: object to serialize
        :param context: the current assembly
        :return: ResourceObject
        """
        metadata = self.resolver.resolve(type(obj))
        if metadata is None:
            raise UnknownResourceError(f"No resource metadata for {type(obj).__name__}")

        resource = ResourceObject(self.attribute_serializer.serialize(obj, metadata))
        resource.prepend("type", metadata.type)
        relationships = self.serialize_relationships(obj, metadata, context)
        if relationships:
            resource.add("relationships", relationships)
        return resource

    def serialize_relationships(self, obj: Any, metadata: ResourceMetadata, context: AssemblyContext) -> Dict[str, Any]:
        """
        :return: relationships object, empty relationships are omitted
        """

        def serialize_full(related: Any) -> Dict[str, Any]:
            context.depth += 1
            try:
                return self.serialize(related, context).to_dict()
            finally:
                context.depth -= 1

        relationships = {}
        include = context.can_include
        for descriptor, related in self.walker.walk(obj, metadata):
            if isinstance(related, Collection):
                identifiers = self.encoder.encode_many(related.values, descriptor, context.registry, serialize_full, include)
                data = [identifier.to_dict() for identifier in identifiers]
            else:
                identifier = self.encoder.encode(related.value, descriptor, context.registry, serialize_full, include)
                if identifier is None:
                    continue
                data = identifier.to_dict()
            relationships[self.naming_strategy.translate_name(descriptor.name)] = {"data": data}
        return relationships


def assemble(obj: Any, **kwargs) -> Dict[str, Any]:
    """
    Assemble the document of `obj` with a DocumentAssembler created with `kwargs`
    """
    return DocumentAssembler(**kwargs).assemble(obj)
