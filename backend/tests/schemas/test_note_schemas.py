"""Note Schemas — boundary validation for create/update payloads.

Invariants:
    - title stripped then length-checked (1-200)
    - color must be #RRGGBB
    - blank category collapses to None
    - NoteUpdate.changes() only contains fields the client sent
    - explicit null on title/content/isPinned rejected; null category/color clears
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from mini_notes.schemas.note import NoteCreate, NoteOut, NoteUpdate


def test_create_accepts_camel_case():
    note = NoteCreate.model_validate({
        "title": "  Groceries  ", "content": "milk", "isPinned": True,
    })
    assert note.title == "Groceries"
    assert note.is_pinned is True


def test_create_rejects_whitespace_title():
    with pytest.raises(ValidationError):
        NoteCreate(title="   ", content="x")


def test_create_rejects_long_title():
    with pytest.raises(ValidationError):
        NoteCreate(title="x" * 201, content="x")


def test_create_rejects_long_content():
    with pytest.raises(ValidationError):
        NoteCreate(title="t", content="x" * 10_001)


@pytest.mark.parametrize("color", ["red", "#fff", "#GGGGGG", "123456"])
def test_create_rejects_bad_color(color):
    with pytest.raises(ValidationError):
        NoteCreate(title="t", content="c", color=color)


def test_blank_category_becomes_none():
    assert NoteCreate(title="t", content="c", category="   ").category is None


def test_update_changes_only_sent_fields():
    update = NoteUpdate.model_validate({"isPinned": True})
    assert update.changes() == {"is_pinned": True}


def test_update_null_category_clears():
    update = NoteUpdate.model_validate({"category": None})
    assert update.changes() == {"category": None}


def test_update_rejects_null_title():
    with pytest.raises(ValidationError):
        NoteUpdate.model_validate({"title": None})


def test_update_empty_has_no_changes():
    assert NoteUpdate.model_validate({}).changes() == {}


def test_note_out_tags_naive_timestamps_as_utc():
    naive = datetime(2026, 1, 2, 3, 4, 5, 600_000)
    note = NoteOut(
        id=1, title="t", content="c", is_pinned=False,
        created_at=naive, updated_at=naive,
    )
    assert note.created_at == naive.replace(tzinfo=timezone.utc)
    assert note.updated_at.utcoffset() == timedelta(0)
