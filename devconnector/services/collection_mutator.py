"""
Operations on embedded, newest-first sub-collections.

Likes, comments, experience and education entries all live inside their
parent document as ordered lists. These helpers never mutate the list they
are given; each returns a new list for the caller to store on the aggregate.
Entries are located by direct equality on an identifier or actor field.
"""
from operator import attrgetter
from typing import Any, Callable, List, Optional, Sequence, TypeVar
from devconnector.exceptions import AlreadyExists, NotFound, Unauthorized

EntryT = TypeVar("EntryT")

entry_id = attrgetter("id")
entry_actor = attrgetter("user")


def _index_of(collection: Sequence[EntryT], predicate: Callable[[EntryT], bool]) -> Optional[int]:
    for index, entry in enumerate(collection):
        if predicate(entry):
            return index
    return None


def _without(collection: Sequence[EntryT], index: int) -> List[EntryT]:
    return list(collection[:index]) + list(collection[index + 1:])


def append_front(collection: Sequence[EntryT], entry: EntryT) -> List[EntryT]:
    """Insert ``entry`` at position 0."""
    return [entry] + list(collection)


def toggle_add(
    collection: Sequence[EntryT],
    actor: Any,
    factory: Callable[[], EntryT],
    actor_of: Callable[[EntryT], Any] = entry_actor,
) -> List[EntryT]:
    """
    Add an entry for ``actor`` unless one already exists.

    Raises:
        AlreadyExists: ``actor`` already has an entry in the collection.
    """
    if _index_of(collection, lambda entry: actor_of(entry) == actor) is not None:
        raise AlreadyExists("Entry already exists for this user")
    return append_front(collection, factory())


def toggle_remove(
    collection: Sequence[EntryT],
    actor: Any,
    actor_of: Callable[[EntryT], Any] = entry_actor,
) -> List[EntryT]:
    """
    Remove the entry belonging to ``actor``.

    Raises:
        NotFound: ``actor`` has no entry in the collection.
    """
    index = _index_of(collection, lambda entry: actor_of(entry) == actor)
    if index is None:
        raise NotFound("No entry exists for this user")
    return _without(collection, index)


def remove_by_id(
    collection: Sequence[EntryT],
    item_id: Any,
    id_of: Callable[[EntryT], Any] = entry_id,
) -> List[EntryT]:
    """
    Remove the entry whose identifier equals ``item_id``.

    Raises:
        NotFound: no entry has that identifier.
    """
    index = _index_of(collection, lambda entry: id_of(entry) == item_id)
    if index is None:
        raise NotFound("Entry not found")
    return _without(collection, index)


def remove_by_owner_and_id(
    collection: Sequence[EntryT],
    actor: Any,
    item_id: Any,
    id_of: Callable[[EntryT], Any] = entry_id,
    actor_of: Callable[[EntryT], Any] = entry_actor,
) -> List[EntryT]:
    """
    Remove the entry ``item_id`` if it was authored by ``actor``.

    Raises:
        NotFound: no entry has that identifier.
        Unauthorized: the entry belongs to someone else.
    """
    index = _index_of(collection, lambda entry: id_of(entry) == item_id)
    if index is None:
        raise NotFound("Entry not found")
    if actor_of(collection[index]) != actor:
        raise Unauthorized("User not authorized")
    return _without(collection, index)
