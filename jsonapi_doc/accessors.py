#
# Reading properties and ids from the objects in the graph
#
import inspect
from collections.abc import Mapping
from types import MemberDescriptorType
import sqlalchemy
from sqlalchemy.orm.state import InstanceState
from .config import get_config
from .errors import MissingIdError, PropertyAccessError
from typing import Any, Optional

_MISSING = object()


class PropertyAccessor:
    """
    Reads a named property from an object, regardless of how the object exposes it:
    mapping keys, `get_<name>()`, `is_<name>()` and `has_<name>()` accessor methods,
    plain attributes and properties
    """

    getter_prefixes = ("get_", "is_", "has_")

    def get_value(self, obj: Any, name: str) -> Any:
        """
        :param obj: object to read from
        :param name: property name
        :return: the property value
        :raises PropertyAccessError: if the object has no such property
        """
        if isinstance(obj, Mapping):
            try:
                return obj[name]
            except KeyError:
                raise PropertyAccessError(f'Key "{name}" not found in {type(obj).__name__}')

        for prefix in self.getter_prefixes:
            getter = getattr(obj, prefix + name, None)
            if callable(getter):
                return getter()

        try:
            return getattr(obj, name)
        except AttributeError as exc:
            static = inspect.getattr_static(obj, name, _MISSING)
            if static is not _MISSING and not isinstance(static, MemberDescriptorType):
                # the attribute exists (unset __slots__ excepted), the error was raised while computing it
                raise
            raise PropertyAccessError(f'Can\'t read "{name}" from {type(obj).__name__}: {exc}') from exc


def get_id(obj: Any, accessor: Optional[PropertyAccessor] = None) -> Any:
    """
    :param obj: resource object
    :param accessor: PropertyAccessor used for objects that aren't sqlalchemy instances
    :return: the id of the object

    For sqlalchemy instances the id is generated from the primary keys,
    composite keys are joined with the PK_DELIMITER.
    """
    state = sqlalchemy.inspect(obj, raiseerr=False)
    if isinstance(state, InstanceState):
        pks = state.mapper.primary_key_from_instance(obj)
        if not pks or any(pk is None for pk in pks):
            raise MissingIdError(f"{type(obj).__name__} instance has no primary key value")
        if len(pks) == 1:
            return pks[0]
        return (get_config("PK_DELIMITER") or "_").join(str(pk) for pk in pks)

    if accessor is None:
        accessor = PropertyAccessor()
    try:
        result = accessor.get_value(obj, "id")
    except PropertyAccessError as exc:
        raise MissingIdError(f"Can't read the id of {type(obj).__name__}") from exc
    if result is None:
        raise MissingIdError(f"{type(obj).__name__} id is None")
    return result
