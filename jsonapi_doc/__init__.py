# flake8: noqa: F401
#
# jsonapi_doc: JSON:API compound documents for in-memory object graphs
#
from .doc_init import JSONAPIDoc, log
from .errors import JsonapiDocError, MissingIdError, PropertyAccessError, UnknownResourceError, RegistryError
from .metadata import (
    RelationshipDescriptor,
    ResourceMetadata,
    MetadataResolver,
    SQLAlchemyMetadataResolver,
    JSONAPIResource,
    default_resolver,
    jsonapi_resource,
)
from .accessors import PropertyAccessor, get_id
from .naming import (
    NamingStrategy,
    IdenticalNamingStrategy,
    SnakeCaseNamingStrategy,
    CamelCaseNamingStrategy,
    DasherizeNamingStrategy,
    get_naming_strategy,
)
from .attributes import AttributeSerializer
from .registry import ResourceIdentifier, IncludedEntry, IncludedResourceRegistry
from .walker import ObjectGraphWalker, EMPTY, Singular, Collection
from .relationships import RelationshipEncoder
from .document import ResourceObject, AssemblyContext, DocumentAssembler, assemble
from .json_encoder import JSONAPIDocJSONEncoder, JSONAPIDocJSONProvider, dumps
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "JSONAPIDoc",
    # metadata:
    "RelationshipDescriptor",
    "ResourceMetadata",
    "MetadataResolver",
    "SQLAlchemyMetadataResolver",
    "JSONAPIResource",
    "default_resolver",
    "jsonapi_resource",
    # collaborators:
    "PropertyAccessor",
    "get_id",
    "NamingStrategy",
    "IdenticalNamingStrategy",
    "SnakeCaseNamingStrategy",
    "CamelCaseNamingStrategy",
    "DasherizeNamingStrategy",
    "get_naming_strategy",
    "AttributeSerializer",
    # document assembly:
    "ResourceIdentifier",
    "IncludedEntry",
    "IncludedResourceRegistry",
    "ObjectGraphWalker",
    "EMPTY",
    "Singular",
    "Collection",
    "RelationshipEncoder",
    "ResourceObject",
    "AssemblyContext",
    "DocumentAssembler",
    "assemble",
    # json:
    "JSONAPIDocJSONEncoder",
    "JSONAPIDocJSONProvider",
    "dumps",
    # Errors:
    "JsonapiDocError",
    "MissingIdError",
    "PropertyAccessError",
    "UnknownResourceError",
    "RegistryError",
)
