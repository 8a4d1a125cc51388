"""Note Schemas — Pydantic models with field-level validation for note endpoints.

Invariants:
    - title: stripped, 1-200 chars, never null
    - content: <= 10000 chars, never null
    - category: stripped, <= 50 chars; blank collapses to null
    - color: #RRGGBB or null
    - NoteUpdate distinguishes "absent" from "null" via model_fields_set; the
      service only touches fields the client actually sent

Design Decisions:
    - Annotated StringConstraints for strip+length: strip happens before the length check
    - Listing query params bound individually in the route (FastAPI Query aliases),
      not as a model, so each gets its own field-level 400
"""

from typing import Annotated

from pydantic import Field, StringConstraints, field_validator, model_validator

from mini_notes.core.domain_types import COLOR_PATTERN
from mini_notes.schemas.base import ApiModel, UtcDateTime

Title = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200),
]
Category = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=50),
]
Color = Annotated[str, StringConstraints(pattern=COLOR_PATTERN)]

_NON_NULLABLE = ("title", "content", "is_pinned")


class NoteCreate(ApiModel):
    title: Title
    content: str = Field(max_length=10_000)
    category: Category | None = None
    color: Color | None = None
    is_pinned: bool = False

    @field_validator("category")
    @classmethod
    def blank_category_is_none(cls, v: str | None) -> str | None:
        return v or None


class NoteUpdate(ApiModel):
    """Partial update — any subset of NoteCreate fields."""
    title: Title | None = None
    content: str | None = Field(None, max_length=10_000)
    category: Category | None = None
    color: Color | None = None
    is_pinned: bool | None = None

    @field_validator("category")
    @classmethod
    def blank_category_is_none(cls, v: str | None) -> str | None:
        return v or None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in _NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client sent, keyed by column name."""
        return self.model_dump(exclude_unset=True, by_alias=False)


class NoteOut(ApiModel):
    id: int
    title: str
    content: str
    category: str | None = None
    color: str | None = None
    is_pinned: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime


class NoteResponse(ApiModel):
    success: bool = True
    data: NoteOut
    message: str | None = None


class NoteListResponse(ApiModel):
    success: bool = True
    data: list[NoteOut]
    count: int


class NoteDeletedResponse(ApiModel):
    success: bool = True
    message: str
