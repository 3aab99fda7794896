"""
Resource metadata: the JSON:API "type" of a class and its relationships

Metadata can be declared

- explicitly, with the `jsonapi_resource` class decorator (or `MetadataResolver.register`),
- on the class, by inheriting from `JSONAPIResource` and setting `_s_type` / `_s_relationships`,
- for sqlalchemy models, by the mapper: the relationships of the model are used
  and `relationship(..., info={"include_by_default": True})` marks a relationship
  to be included by default.

Example:

    @jsonapi_resource("people", relationships=[RelationshipDescriptor("books", include_by_default=True)])
    class Person:
        ...
"""
import sqlalchemy
from sqlalchemy.orm import Mapper
import jsonapi_doc
from .util import classproperty
from typing import Iterable, NamedTuple, Optional, Tuple, Union

INCLUDE_BY_DEFAULT = "include_by_default"  # sqlalchemy relationship info key


class RelationshipDescriptor(NamedTuple):
    """
    A relationship declared on a resource class
    :param name: name of the property holding the related object(s)
    :param include_by_default: whether the related resources are side-loaded in "included"
    """

    name: str
    include_by_default: bool = False


class ResourceMetadata(NamedTuple):
    """
    The JSON:API type and the relationships (in declaration order) of a resource class
    """

    type: str
    relationships: Tuple[RelationshipDescriptor, ...] = ()


def to_descriptor(relationship: Union[str, RelationshipDescriptor]) -> RelationshipDescriptor:
    """
    :param relationship: RelationshipDescriptor or a property name
    :return: RelationshipDescriptor
    """
    if isinstance(relationship, RelationshipDescriptor):
        return relationship
    if isinstance(relationship, str):
        return RelationshipDescriptor(relationship)
    name, include_by_default = relationship
    return RelationshipDescriptor(name, bool(include_by_default))


class JSONAPIResource:
    """
    Mixin for classes that declare their own metadata:

        class Person(JSONAPIResource):
            _s_type = "people"
            _s_relationships = ("friends", RelationshipDescriptor("books", True))
    """

    _s_relationships = ()

    @classproperty
    def _s_type(cls) -> str:
        """
        :return: the jsonapi "type", i.e. the tablename if this is a db model, the classname otherwise
        """
        return getattr(cls, "__tablename__", cls.__name__)


class MetadataResolver:
    """
    Looks up the `ResourceMetadata` of a class.

    Subclasses inherit the metadata of their closest registered base class.
    The result is cached per class, unknown classes resolve to None.
    """

    def __init__(self) -> None:
        self._registry = {}
        self._cache = {}

    def register(self, cls: type, type: Optional[str] = None, relationships: Iterable = ()) -> ResourceMetadata:
        """
        :param cls: class to register
        :param type: JSON:API type, defaults to the class name
        :param relationships: RelationshipDescriptors or property names
        :return: the registered metadata
        """
        metadata = ResourceMetadata(type or cls.__name__, tuple(to_descriptor(rel) for rel in relationships))
        self._registry[cls] = metadata
        self._cache.clear()
        return metadata

    def resolve(self, cls: type) -> Optional[ResourceMetadata]:
        """
        :param cls: the class (or an instance) to look up
        :return: ResourceMetadata or None if the class is unknown
        """
        if not isinstance(cls, type):
            cls = type(cls)
        try:
            return self._cache[cls]
        except KeyError:
            pass
        metadata = self._lookup(cls)
        if metadata is None:
            jsonapi_doc.log.debug(f"No resource metadata for {cls.__name__}")
        self._cache[cls] = metadata
        return metadata

    __call__ = resolve

    def _lookup(self, cls: type) -> Optional[ResourceMetadata]:
        for klass in cls.__mro__:
            if klass in self._registry:
                return self._registry[klass]
        if issubclass(cls, JSONAPIResource):
            return ResourceMetadata(cls._s_type, tuple(to_descriptor(rel) for rel in cls._s_relationships))
        return None


class SQLAlchemyMetadataResolver(MetadataResolver):
    """
    MetadataResolver that also knows about sqlalchemy mapped classes:
    the type is the tablename and the relationships are taken from the mapper.
    Relationship names listed in the `exclude_rels` class attribute are skipped.

    Explicitly registered metadata and `_s_relationships` declarations take precedence.
    """

    def _lookup(self, cls: type) -> Optional[ResourceMetadata]:
        for klass in cls.__mro__:
            if klass in self._registry:
                return self._registry[klass]
        mapper = sqlalchemy.inspect(cls, raiseerr=False)
        if isinstance(mapper, Mapper) and not getattr(cls, "_s_relationships", None):
            return self._mapper_metadata(cls, mapper)
        return super()._lookup(cls)

    @staticmethod
    def _mapper_metadata(cls: type, mapper: Mapper) -> ResourceMetadata:
        exclude_rels = getattr(cls, "exclude_rels", [])
        relationships = tuple(
            RelationshipDescriptor(rel.key, bool(rel.info.get(INCLUDE_BY_DEFAULT, False)))
            for rel in mapper.relationships
            if rel.key not in exclude_rels
        )
        type_ = cls._s_type if issubclass(cls, JSONAPIResource) else getattr(cls, "__tablename__", cls.__name__)
        return ResourceMetadata(type_, relationships)


default_resolver = SQLAlchemyMetadataResolver()


def jsonapi_resource(type: Optional[str] = None, relationships: Iterable = (), resolver: Optional[MetadataResolver] = None):
    """
    Class decorator registering the resource metadata of a class
    :param type: JSON:API type, defaults to the class name
    :param relationships: RelationshipDescriptors or property names
    :param resolver: defaults to `default_resolver`
    """

    def register(cls):
        (resolver or default_resolver).register(cls, type, relationships)
        return cls

    return register
