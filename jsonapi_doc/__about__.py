__version__ = "1.0.0"
__description__ = "jsonapi_doc : JSON:API compound documents for in-memory object graphs"
