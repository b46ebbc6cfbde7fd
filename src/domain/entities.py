from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
RoleType = Literal["owner", "admin", "editor", "author"]
PostStatus = Literal["published", "draft"]
TagType = Literal["post"]


def _now() -> datetime:
    return datetime.now(UTC)


# --- Settings ---

class Setting(BaseModel):
    name: str
    value: str


# --- Users & Auth ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    slug: str
    name: str
    email: str
    password_hash: str
    role: RoleType = "owner"
    created_at: datetime = Field(default_factory=_now)


class Session(BaseModel):
    id: str  # Token or Session ID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    created_at: datetime = Field(default_factory=_now)


# --- Taxonomy ---

class Tag(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    slug: str
    name: str
    description: str = ""
    type: TagType = "post"
    created_at: datetime = Field(default_factory=_now)


# --- Content ---

class Post(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    slug: str
    title: str
    content: str
    author: str  # owner slug
    image: str = ""
    status: PostStatus = "draft"
    tags: list[str] = Field(default_factory=list)  # tag slugs
    sticky: bool = False
    pub_date: datetime
    created_at: datetime = Field(default_factory=_now)
