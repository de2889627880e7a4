"""Find-or-create and array mutation helpers for per-user documents.

Every model passed in here has a unique ``user_id`` column, so a user owns at
most one row of each kind. JSON lists are always reassigned rather than
mutated in place so SQLAlchemy's change detection sees the write.
"""

import logging
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from .errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT")


def find_user_document(db: Session, model: type[DocumentT], user_id: int) -> DocumentT | None:
    """Return the user's row, or None if it has not been created yet."""
    return db.query(model).filter(model.user_id == user_id).first()


def get_or_create_user_document(db: Session, model: type[DocumentT], user_id: int) -> DocumentT:
    """Get the user's row, or create an empty one if none exists."""
    document = find_user_document(db, model, user_id)
    if document is None:
        document = model(user_id=user_id)
        db.add(document)
        db.flush()
        logger.info(f"Created {model.__name__} for user {user_id}")
    return document


def replace_field(db: Session, model: type[DocumentT], user_id: int, field: str, values: list) -> DocumentT:
    """Overwrite one array field entirely (no merge)."""
    document = get_or_create_user_document(db, model, user_id)
    setattr(document, field, list(values))
    db.flush()
    return document


def add_to_set(db: Session, model: type[DocumentT], user_id: int, field: str, value: Any) -> bool:
    """Add a value to a set-like array field if it is absent.

    Returns:
        True if the value was added, False if it was already present.
    """
    document = get_or_create_user_document(db, model, user_id)
    current = getattr(document, field) or []
    if value in current:
        return False
    setattr(document, field, current + [value])
    db.flush()
    return True


def remove_value(db: Session, model: type[DocumentT], user_id: int, field: str, value: Any) -> bool:
    """Remove every occurrence of a value from an array field.

    Never creates a row.

    Returns:
        True if something was removed.
    """
    document = find_user_document(db, model, user_id)
    if document is None:
        return False
    current = getattr(document, field) or []
    remaining = [v for v in current if v != value]
    if len(remaining) == len(current):
        return False
    setattr(document, field, remaining)
    db.flush()
    return True


def _same_id(item: dict, item_id: Any) -> bool:
    # Clients send pantry ids as numbers or strings interchangeably
    return str(item.get("id")) == str(item_id)


def append_item(
    db: Session,
    model: type[DocumentT],
    user_id: int,
    item: dict,
    unique_id: bool = False,
    duplicate_message: str = "Item already exists",
) -> dict:
    """Append a sub-item to the user's ``items`` list.

    Args:
        unique_id: Reject the item if one with the same id already exists.

    Raises:
        ConflictError: On a duplicate id when unique_id is set.
    """
    document = get_or_create_user_document(db, model, user_id)
    current = document.items or []
    if unique_id and any(_same_id(existing, item.get("id")) for existing in current):
        raise ConflictError(duplicate_message)
    document.items = current + [item]
    db.flush()
    logger.info(f"Added item to {model.__name__} for user {user_id}: {item.get('name')}")
    return item


def remove_item(db: Session, model: type[DocumentT], user_id: int, item_id: Any) -> list[dict]:
    """Remove a sub-item by id.

    Returns:
        The remaining items.

    Raises:
        NotFoundError: If the user has no row or the item is absent.
    """
    document = find_user_document(db, model, user_id)
    if document is None:
        raise NotFoundError(f"{model.__name__} not found")

    current = document.items or []
    remaining = [item for item in current if not _same_id(item, item_id)]
    if len(remaining) == len(current):
        raise NotFoundError("Item not found")

    document.items = remaining
    db.flush()
    logger.info(f"Removed item {item_id} from {model.__name__} for user {user_id}")
    return remaining


def update_item(db: Session, model: type[DocumentT], user_id: int, item_id: Any, **changes) -> list[dict]:
    """Apply a partial update to one sub-item.

    Raises:
        NotFoundError: If the user has no row or the item is absent.
    """
    document = find_user_document(db, model, user_id)
    if document is None:
        raise NotFoundError("Item not found")

    updated_items = []
    found = False
    for item in document.items or []:
        if _same_id(item, item_id):
            item = {**item, **changes}
            found = True
        updated_items.append(item)

    if not found:
        raise NotFoundError("Item not found")

    document.items = updated_items
    db.flush()
    return updated_items


def clear_items(db: Session, model: type[DocumentT], user_id: int) -> None:
    """Remove all sub-items.

    Raises:
        NotFoundError: If there is nothing to clear.
    """
    document = find_user_document(db, model, user_id)
    if document is None or not document.items:
        raise NotFoundError(f"{model.__name__} is empty")
    document.items = []
    db.flush()
    logger.info(f"Cleared {model.__name__} for user {user_id}")
