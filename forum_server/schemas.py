"""
Schemas for the forum core and HTTP layer.

Drafts validate caller input before anything touches the store:
- PostDraft    -> top-level node, title and body required
- CommentDraft -> child node, parent id and body required, no title

Views are the read-side shapes returned to callers.
"""

from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without an offset; they are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# ---------- Drafts ----------

class PostDraft(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Post title")
    body: str = Field(..., min_length=1, description="Post body")


class CommentDraft(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    parent_id: str = Field(..., min_length=1, description="Id of the post or comment replied to")
    body: str = Field(..., min_length=1, description="Comment body")


# ---------- Views ----------

class AuthorView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


class CommentView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    body: str
    author: AuthorView
    child_ids: List[str] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ContentNodeView(BaseModel):
    """A node with its author and its direct comments resolved."""

    id: str
    title: Optional[str] = None
    parent_id: Optional[str] = None
    body: str
    author: AuthorView
    comments: List[CommentView] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime


class NodeRecord(BaseModel):
    """A node as stored, references left unresolved."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: Optional[str] = None
    body: str
    author_id: str
    parent_id: Optional[str] = None
    child_ids: List[str] = Field(default_factory=list)
    created_at: UtcDatetime
    updated_at: UtcDatetime
