# Configuration settings can be set in app.config when a Flask application is used,
# as keyword arguments to JSONAPIDoc(), or as environment variables.
# get_config() looks them up in that order, falling back to the JSONAPIDoc class defaults
import os
import logging
from flask import current_app
from functools import lru_cache
import jsonapi_doc
from typing import Any, Optional


@lru_cache(maxsize=128)
def get_config(option: str) -> Optional[Any]:
    """Retrieve a configuration parameter
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # RuntimeError: working outside of application context
        result = getattr(jsonapi_doc.JSONAPIDoc, option, None)
        if result is None:
            result = os.environ.get(option, None)
    return result


def get_int_config(option: str, default: int = 0) -> int:
    """
    :param option: configuration parameter
    :param default: used when the option is not set
    :return: the configuration value cast to int
    """
    value = get_config(option)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        jsonapi_doc.log.warning(f'Invalid value for {option}: "{value}", using {default}')
        return default


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return jsonapi_doc.log.getEffectiveLevel() < logging.INFO
