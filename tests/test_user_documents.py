"""Tests for the per-user document helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from recipe_planner.errors import ConflictError, NotFoundError
from recipe_planner.models import Pantry, Preference, Role, User
from recipe_planner.user_documents import (
    add_to_set,
    append_item,
    clear_items,
    find_user_document,
    get_or_create_user_document,
    remove_item,
    remove_value,
    replace_field,
    update_item,
)


@pytest.fixture
def user_id(db):
    user = User(
        username="janedoe",
        password_hash="x",
        email="jane@example.com",
        first_name="Jane",
        last_name="Doe",
        role=Role.USER,
    )
    db.add(user)
    db.commit()
    return user.id


def test_get_or_create_returns_same_row(db, user_id):
    first = get_or_create_user_document(db, Preference, user_id)
    second = get_or_create_user_document(db, Preference, user_id)
    assert first.id == second.id
    assert db.query(Preference).count() == 1


def test_replace_field_overwrites(db, user_id):
    replace_field(db, Preference, user_id, "diet", ["Vegan", "Paleo"])
    replace_field(db, Preference, user_id, "diet", ["Primal"])
    assert find_user_document(db, Preference, user_id).diet == ["Primal"]


def test_add_to_set(db, user_id):
    assert add_to_set(db, Preference, user_id, "favorite_recipes", 10)
    assert not add_to_set(db, Preference, user_id, "favorite_recipes", 10)
    assert find_user_document(db, Preference, user_id).favorite_recipes == [10]


def test_remove_value_never_creates_row(db, user_id):
    assert not remove_value(db, Preference, user_id, "favorite_recipes", 10)
    assert find_user_document(db, Preference, user_id) is None


def test_append_rejects_duplicate_id(db, user_id):
    append_item(db, Pantry, user_id, {"id": 1, "name": "rice"}, unique_id=True)
    with pytest.raises(ConflictError):
        append_item(db, Pantry, user_id, {"id": "1", "name": "rice"}, unique_id=True)
    assert len(find_user_document(db, Pantry, user_id).items) == 1


def test_remove_item(db, user_id):
    append_item(db, Pantry, user_id, {"id": 1, "name": "rice"})
    append_item(db, Pantry, user_id, {"id": 2, "name": "beans"})
    assert remove_item(db, Pantry, user_id, "1") == [{"id": 2, "name": "beans"}]


def test_remove_item_without_row(db, user_id):
    with pytest.raises(NotFoundError) as excinfo:
        remove_item(db, Pantry, user_id, 1)
    assert excinfo.value.message == "Pantry not found"


def test_update_item_merges_changes(db, user_id):
    append_item(db, Pantry, user_id, {"id": 1, "name": "rice"})
    items = update_item(db, Pantry, user_id, 1, expirationDate="2026-11-01")
    assert items == [{"id": 1, "name": "rice", "expirationDate": "2026-11-01"}]


def test_clear_items(db, user_id):
    append_item(db, Pantry, user_id, {"id": 1, "name": "rice"})
    clear_items(db, Pantry, user_id)
    assert find_user_document(db, Pantry, user_id).items == []
    with pytest.raises(NotFoundError):
        clear_items(db, Pantry, user_id)


def test_timestamps_are_naive_utc(db, user_id):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    document = get_or_create_user_document(db, Preference, user_id)
    db.commit()
    assert document.created_at.tzinfo is None
    assert before - timedelta(seconds=1) <= document.created_at <= before + timedelta(minutes=1)
