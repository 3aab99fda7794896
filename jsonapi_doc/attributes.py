#
# Serialization of the object's own (non-relationship) attributes
#
import sqlalchemy
from sqlalchemy.orm.state import InstanceState
from .accessors import get_id
from .metadata import ResourceMetadata
from .naming import NamingStrategy, SnakeCaseNamingStrategy
from typing import Any, Callable, Dict, List, Optional, Tuple


class AttributeSerializer:
    """
    Creates the attribute part of a resource object: the id, followed by the object attributes.

    - sqlalchemy instances: the mapped columns, in declaration order
    - other objects: the instance `vars()`

    Relationship properties, names starting with "_" and the names listed in the `exclude_attrs`
    class attribute are not serialized. Values are returned as is, json encoding happens when the
    document is dumped.
    """

    def __init__(self, naming_strategy: Optional[NamingStrategy] = None, id_getter: Callable = get_id) -> None:
        self.naming_strategy = naming_strategy or SnakeCaseNamingStrategy()
        self.id_getter = id_getter

    def serialize(self, obj: Any, metadata: Optional[ResourceMetadata] = None) -> Dict[str, Any]:
        """
        :param obj: object to serialize
        :param metadata: resource metadata of the object
        :return: dict with the id and the attribute wire keys and values
        """
        excluded = set(getattr(obj, "exclude_attrs", []))
        if metadata is not None:
            excluded.update(rel.name for rel in metadata.relationships)

        result = {"id": str(self.id_getter(obj))}
        for name, value in self.attributes(obj):
            if name == "id" or name.startswith("_") or name in excluded:
                continue
            result[self.naming_strategy.translate_name(name)] = value
        return result

    @staticmethod
    def attributes(obj: Any) -> List[Tuple[str, Any]]:
        """
        :param obj: object to serialize
        :return: (name, value) list of the object attributes
        """
        state = sqlalchemy.inspect(obj, raiseerr=False)
        if isinstance(state, InstanceState):
            return [(attr.key, getattr(obj, attr.key)) for attr in state.mapper.column_attrs]
        try:
            return list(vars(obj).items())
        except TypeError:
            # no __dict__, eg. __slots__ classes
            return []
