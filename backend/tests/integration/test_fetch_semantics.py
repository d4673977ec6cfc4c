"""Eager and lazy association loading, and transactional scope lifetimes."""

import pytest
from sqlalchemy.orm.exc import DetachedInstanceError

from dossier.database import current_session, transactional
from dossier.errors import InactiveSessionError
from dossier.models import Document, Person


@pytest.fixture
def holder(persons, documents):
    """A saved person holding two saved documents."""
    person = persons.save(Person(name="Holder"))
    documents.save_all([
        Document(code="HOLD0001", person=person),
        Document(code="HOLD0002", person=person),
    ])
    return person


def test_document_person_is_loaded_eagerly(holder, documents) -> None:
    document = next(iter(documents.find_all_by_person_id(holder.id)))

    reread = documents.find_by_id(document.id)

    # Session is closed; the person was loaded with the row
    assert current_session() is None
    assert reread.person == holder
    assert reread.person.name == "Holder"


def test_person_documents_outside_scope_fail(holder, persons) -> None:
    reread = persons.find_by_id(holder.id)

    assert reread.name == "Holder"
    with pytest.raises(DetachedInstanceError):
        reread.documents


def test_person_documents_via_eager_document_are_still_lazy(holder, documents) -> None:
    document = next(iter(documents.find_all_by_person_id(holder.id)))

    with pytest.raises(DetachedInstanceError):
        document.person.documents


def test_person_documents_inside_scope(holder, persons) -> None:
    with transactional():
        reread = persons.find_by_id(holder.id)
        codes = {document.code for document in reread.documents}

    assert codes == {"HOLD0001", "HOLD0002"}
    # Loaded while the scope was open, so still readable after it closed
    assert len(reread.documents) == 2


def test_load_documents_requires_scope(holder, persons) -> None:
    with pytest.raises(InactiveSessionError):
        persons.load_documents(holder)


def test_load_documents_for_detached_person(holder, persons) -> None:
    reread = persons.find_by_id(holder.id)

    with transactional():
        loaded = persons.load_documents(reread)

    assert {document.code for document in loaded} == {"HOLD0001", "HOLD0002"}
    assert all(document.person == holder for document in loaded)


def test_load_documents_for_unsaved_person(persons) -> None:
    document = Document(code="DRAFT001")
    person = Person(name="Draft", documents={document})

    with transactional():
        assert persons.load_documents(person) == {document}


def test_scope_commits_on_exit(persons) -> None:
    with transactional():
        persons.save(Person(name="Committed"))
        persons.save(Person(name="Committed"))

    assert len(persons.find_all_by_name("Committed")) == 2


def test_scope_rolls_back_on_error(persons) -> None:
    with pytest.raises(RuntimeError):
        with transactional():
            persons.save(Person(name="Ghost"))
            raise RuntimeError("abort")

    assert persons.find_all_by_name("Ghost") == []
    assert current_session() is None


def test_nested_scope_joins_outer(persons) -> None:
    with transactional(rollback_only=True) as outer:
        with transactional() as inner:
            assert inner is outer
            persons.save(Person(name="Nested"))
        # Inner exit did not commit on its own
        assert current_session() is outer

    assert persons.find_all_by_name("Nested") == []


def test_scope_sees_its_own_writes(persons, documents) -> None:
    with transactional(rollback_only=True):
        person = persons.save(Person(name="Visible"))
        document = documents.save(Document(code="VIS00001", person=person))

        assert persons.exists_by_id(person.id)
        assert documents.find_all_by_person_id(person.id) == {document}
        assert persons.find_by_id(person.id) is person
