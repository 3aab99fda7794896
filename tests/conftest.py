from typing import Optional

import pytest

from jsonapi_doc import DocumentAssembler, IdenticalNamingStrategy, MetadataResolver, RelationshipDescriptor
from jsonapi_doc.config import get_config


class Person:
    def __init__(self, id: Optional[int], name: str, books: Optional[list] = None, friend: object = None, favorite: object = None) -> None:
        self.id = id
        self.name = name
        self.books = books if books is not None else []
        self.friend = friend
        self.favorite = favorite


class Book:
    def __init__(self, id: Optional[int], title: str, author: object = None, editor: object = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.editor = editor


class Unregistered:
    def __init__(self, id: int) -> None:
        self.id = id


@pytest.fixture(autouse=True)
def _clear_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def resolver() -> MetadataResolver:
    resolver = MetadataResolver()
    resolver.register(
        Person,
        "people",
        [RelationshipDescriptor("books", True), RelationshipDescriptor("friend", True), RelationshipDescriptor("favorite", False)],
    )
    resolver.register(Book, "books", [RelationshipDescriptor("author", True), RelationshipDescriptor("editor", True)])
    return resolver


@pytest.fixture
def assembler(resolver: MetadataResolver) -> DocumentAssembler:
    return DocumentAssembler(resolver=resolver, naming_strategy=IdenticalNamingStrategy())
