import logging

import pytest

from conftest import Book, Person, Unregistered
from jsonapi_doc import (
    CamelCaseNamingStrategy,
    DocumentAssembler,
    MetadataResolver,
    MissingIdError,
    RelationshipDescriptor,
    ResourceObject,
    UnknownResourceError,
    dumps,
)


def _included_ids(document: dict) -> list:
    return [(item["type"], item["id"]) for item in document.get("included", [])]


def test_resource_without_relationships(assembler: DocumentAssembler) -> None:
    document = assembler.assemble(Person(1, "Ann"))

    assert document == {"type": "people", "id": "1", "name": "Ann"}
    assert list(document)[0] == "type"


def test_to_many_data_is_a_list_and_to_one_an_object(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann")
    book = Book(10, "Python", author=ann)
    ann.books.append(book)
    ann.favorite = book

    document = assembler.assemble(ann)

    assert document["relationships"] == {
        "books": {"data": [{"type": "books", "id": "10"}]},
        "favorite": {"data": {"type": "books", "id": "10"}},
    }
    assert document["included"] == [
        {"type": "books", "id": "10", "title": "Python", "relationships": {"author": {"data": {"type": "people", "id": "1"}}}},
        {"type": "people", "id": "1", "name": "Ann", "relationships": {
            "books": {"data": [{"type": "books", "id": "10"}]},
            "favorite": {"data": {"type": "books", "id": "10"}},
        }},
    ]


def test_included_order_follows_iteration_order(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann", books=[Book(12, "B"), Book(11, "C")])

    document = assembler.assemble(ann)

    assert [item["id"] for item in document["relationships"]["books"]["data"]] == ["12", "11"]
    assert _included_ids(document) == [("books", "12"), ("books", "11")]


def test_cycle_terminates(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann")
    bob = Person(2, "Bob", friend=ann)
    ann.friend = bob

    document = assembler.assemble(ann)

    assert document["relationships"] == {"friend": {"data": {"type": "people", "id": "2"}}}
    assert _included_ids(document) == [("people", "2"), ("people", "1")]
    assert document["included"][0]["relationships"] == {"friend": {"data": {"type": "people", "id": "1"}}}
    assert document["included"][1]["relationships"] == {"friend": {"data": {"type": "people", "id": "2"}}}


def test_self_reference(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann")
    ann.friend = ann

    document = assembler.assemble(ann)

    assert _included_ids(document) == [("people", "1")]


def test_shared_target_is_included_once(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann")
    book = Book(10, "Python", author=ann, editor=ann)

    document = assembler.assemble(book)

    assert document["relationships"]["author"] == document["relationships"]["editor"] == {"data": {"type": "people", "id": "1"}}
    assert _included_ids(document) == [("people", "1")]


def test_objects_with_equal_ids_are_included_once(assembler: DocumentAssembler) -> None:
    # two distinct objects representing the same resource
    ann = Person(1, "Ann", books=[Book(10, "first copy"), Book(10, "second copy")])

    document = assembler.assemble(ann)

    assert len(document["relationships"]["books"]["data"]) == 2
    assert document["included"] == [{"type": "books", "id": "10", "title": "first copy"}]


def test_no_duplicates_in_included(assembler: DocumentAssembler) -> None:
    ann, bob, cid = Person(1, "Ann"), Person(2, "Bob"), Person(3, "Cid")
    books = [Book(i, f"book {i}", author=[ann, bob, cid][i % 3], editor=ann) for i in range(10)]
    ann.books, bob.books, cid.books = books[:4], books[3:7], books[6:]
    ann.friend, bob.friend, cid.friend = bob, cid, ann

    document = assembler.assemble(ann)

    identifiers = _included_ids(document)
    assert len(identifiers) == len(set(identifiers)) == 13


def test_relationship_not_included_by_default(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann", favorite=Book(10, "Python"))

    document = assembler.assemble(ann)

    assert document["relationships"] == {"favorite": {"data": {"type": "books", "id": "10"}}}
    assert "included" not in document


def test_empty_relationships_are_omitted(assembler: DocumentAssembler) -> None:
    document = assembler.assemble(Person(1, "Ann", books=[], friend=None))

    assert "relationships" not in document
    assert "included" not in document


def test_unknown_target_type_is_skipped(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann", books=[Book(10, "Python"), Unregistered(5)], friend=Unregistered(6))

    document = assembler.assemble(ann)

    assert document["relationships"] == {"books": {"data": [{"type": "books", "id": "10"}]}}
    assert _included_ids(document) == [("books", "10")]


def test_to_many_with_only_unknown_targets(assembler: DocumentAssembler) -> None:
    document = assembler.assemble(Person(1, "Ann", books=[Unregistered(5)]))

    assert document["relationships"] == {"books": {"data": []}}


@pytest.mark.parametrize("value", [0, False, "", 5, "abc", 1.5])
def test_scalar_relationship_value_raises(assembler: DocumentAssembler, value: object) -> None:
    with pytest.raises(MissingIdError) as exc_info:
        assembler.assemble(Person(1, "Ann", friend=value))
    assert "is not a resource object" in str(exc_info.value)


def test_scalar_in_to_many_relationship_raises(assembler: DocumentAssembler) -> None:
    with pytest.raises(MissingIdError):
        assembler.assemble(Person(1, "Ann", books=[Book(10, "Python"), 11]))


def test_error_in_relationship_property_propagates(resolver: MetadataResolver) -> None:
    class Owner:
        def __init__(self, id):
            self.id = id

        @property
        def rel(self):
            return self.missing_attr.thing

    resolver.register(Owner, "owners", [RelationshipDescriptor("rel", True)])
    assembler = DocumentAssembler(resolver=resolver)

    with pytest.raises(AttributeError) as exc_info:
        assembler.assemble(Owner(1))
    assert "missing_attr" in str(exc_info.value)


def test_missing_target_id_raises(assembler: DocumentAssembler) -> None:
    with pytest.raises(MissingIdError) as exc_info:
        assembler.assemble(Person(1, "Ann", friend=Person(None, "Nobody")))
    assert "Person id is None" in str(exc_info.value)


def test_unknown_primary_resource_raises(assembler: DocumentAssembler) -> None:
    with pytest.raises(UnknownResourceError):
        assembler.assemble(Unregistered(1))


def test_assembly_is_deterministic(assembler: DocumentAssembler) -> None:
    ann = Person(1, "Ann")
    bob = Person(2, "Bob", friend=ann, books=[Book(10, "Python", author=ann)])
    ann.friend = bob
    ann.books = [Book(11, "Flask", author=bob, editor=ann)]

    first = assembler.assemble(ann)
    second = assembler.assemble(ann)

    assert first == second
    assert dumps(first) == dumps(second)


def test_registry_is_not_shared_between_documents(assembler: DocumentAssembler) -> None:
    book = Book(10, "Python")

    first = assembler.assemble(Person(1, "Ann", books=[book]))
    second = assembler.assemble(Person(2, "Bob", books=[book]))

    assert _included_ids(first) == _included_ids(second) == [("books", "10")]


def test_max_include_depth(resolver: MetadataResolver, caplog: pytest.LogCaptureFixture) -> None:
    ann = Person(1, "Ann")
    ann.books = [Book(10, "Python", author=Person(2, "Bob"))]
    assembler = DocumentAssembler(resolver=resolver, max_depth=1)

    with caplog.at_level(logging.WARNING):
        document = assembler.assemble(ann)

    assert _included_ids(document) == [("books", "10")]
    assert document["included"][0]["relationships"] == {"author": {"data": {"type": "people", "id": "2"}}}
    assert "Maximum include depth reached, people:2 will not be included" in caplog.text


def test_max_include_depth_zero(resolver: MetadataResolver) -> None:
    assembler = DocumentAssembler(resolver=resolver, max_depth=0)

    document = assembler.assemble(Person(1, "Ann", books=[Book(10, "Python")]))

    assert document["relationships"] == {"books": {"data": [{"type": "books", "id": "10"}]}}
    assert "included" not in document


def test_naming_strategy_translates_relationship_keys() -> None:
    class Author:
        def __init__(self, id, full_name, best_friend=None):
            self.id = id
            self.full_name = full_name
            self.best_friend = best_friend

    resolver = MetadataResolver()
    resolver.register(Author, "authors", [RelationshipDescriptor("best_friend")])
    assembler = DocumentAssembler(resolver=resolver, naming_strategy=CamelCaseNamingStrategy())

    document = assembler.assemble(Author(1, "Ann Smith", best_friend=Author(2, "Bob")))

    assert document == {
        "type": "authors",
        "id": "1",
        "fullName": "Ann Smith",
        "relationships": {"bestFriend": {"data": {"type": "authors", "id": "2"}}},
    }


def test_assemble_many_shares_included(assembler: DocumentAssembler) -> None:
    book = Book(10, "Python")

    document = assembler.assemble_many([Person(1, "Ann", books=[book]), Person(2, "Bob", books=[book])])

    assert [item["id"] for item in document["data"]] == ["1", "2"]
    assert _included_ids(document) == [("books", "10")]


def test_assemble_many_without_included(assembler: DocumentAssembler) -> None:
    assert assembler.assemble_many([]) == {"data": []}


def test_resource_object_prepend() -> None:
    resource = ResourceObject({"id": "1", "name": "Ann", "type": "old"})

    resource.prepend("type", "people")
    resource.add("relationships", {})

    assert list(resource) == ["type", "id", "name", "relationships"]
    assert resource["type"] == "people"
    assert "name" in resource
    assert len(resource) == 4
