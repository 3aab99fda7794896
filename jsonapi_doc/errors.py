# Exceptions
#
# Errors raised while assembling a document are programming or configuration errors,
# they are logged here and propagated to the caller.
#
# The loglevel determines the level of detail kept in the `message` attribute,
# str(exc) always contains the full message.
#
import jsonapi_doc
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class JsonapiDocError(Exception):
    """
    Base class for the jsonapi_doc exceptions
    """

    message = "Error: "

    def __init__(self, message: str = "") -> None:
        Exception.__init__(self, message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class MissingIdError(JsonapiDocError, ValueError):
    """
    This exception is raised when a resource has no (readable) id,
    a resource identifier can't be created without it
    """

    message = "Missing Id: "

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        jsonapi_doc.log.error("MissingIdError: %s", message)


class PropertyAccessError(JsonapiDocError, AttributeError):
    """
    This exception is raised when a property can't be read from an object.
    Absent relationship properties are treated as empty, hence the debug level
    """

    message = "Property Access Error: "

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        jsonapi_doc.log.debug("PropertyAccessError: %s", message)


class UnknownResourceError(JsonapiDocError, LookupError):
    """
    This exception is raised when the primary object of a document has no resource metadata
    (unknown relationship targets are skipped instead)
    """

    message = "Unknown Resource: "

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        jsonapi_doc.log.error("UnknownResourceError: %s", message)


class RegistryError(JsonapiDocError):
    """
    This exception is raised when an included resource slot is used inconsistently,
    eg. when it is promoted twice
    """

    message = "Registry Error: "

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        jsonapi_doc.log.error("RegistryError: %s", message)
