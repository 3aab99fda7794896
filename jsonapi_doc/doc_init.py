import logging
import os
import sys
from flask import Flask
import flask.app
from .config import get_config
from .json_encoder import JSONAPIDocJSONProvider


class JSONAPIDoc:
    """This class holds the document assembly configuration and optionally hooks it into a Flask application
    :param app: a Flask application.
    :param MAX_INCLUDE_DEPTH: related objects nested deeper than this are referenced but not included
    :param NAMING_STRATEGY: property name to wire key translation: identical, snake_case, camel_case or dasherize
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    MAX_INCLUDE_DEPTH = 32
    NAMING_STRATEGY = "snake_case"
    LOGLEVEL = logging.WARNING
    PK_DELIMITER = "_"  # joins the primary key values of composite key sqlalchemy instances

    def __init__(self, app: flask.app.Flask = None, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, **kwargs)

    def init_app(self, app: flask.app.Flask, **kwargs) -> None:
        """
        Application initialization: the app config overrides the class defaults and
        the app will serialize documents with the JSON:API json provider
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        app.json = JSONAPIDocJSONProvider(app)

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(JSONAPIDoc, conf_name, conf_val)

        for conf_name, conf_val in app.config.items():
            if conf_name.isupper():
                setattr(JSONAPIDoc, conf_name, conf_val)

        get_config.cache_clear()

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = JSONAPIDoc.init_logging(LOGLEVEL)
