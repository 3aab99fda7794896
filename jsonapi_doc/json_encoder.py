# document to json encoding

import datetime
import decimal
import json
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import jsonapi_doc
from .document import ResourceObject
from typing import Any


class _JSONAPIDocJSONEncoder:
    """
    JSON encoding of the attribute values found in documents
    """

    # pylint: disable=too-many-return-statements
    # pylint: disable=arguments-differ,method-hidden
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, ResourceObject):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            jsonapi_doc.log.debug("JSONAPIDocJSONEncoder: serializing bytes obj")
            return obj.hex()

        # We shouldn't get here, the attribute serializer returned something that can't be represented in json
        jsonapi_doc.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        return str(obj)


class JSONAPIDocJSONProvider(_JSONAPIDocJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding
    """

    mimetype = "application/vnd.api+json"
    sort_keys = False  # the resource objects start with "type"


class JSONAPIDocJSONEncoder(_JSONAPIDocJSONEncoder, json.JSONEncoder):
    """
    Common JSON encoding
    """

    pass


def dumps(document: Any, **kwargs: Any) -> str:
    """
    :param document: assembled document
    :return: json string
    """
    return json.dumps(document, cls=JSONAPIDocJSONEncoder, **kwargs)
