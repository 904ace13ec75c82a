# dental_api/schemas/post.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from dental_api.schemas.base import CamelModel, EntryEdit


class PostSummary(CamelModel):
    id: int
    title: str
    author: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class PostOut(PostSummary):
    content: str
    image_data: Optional[str] = None
    user_id: Optional[int] = None


class CommentOut(CamelModel):
    id: int
    post_id: int
    author: str
    content: str
    likes: int
    tags: Optional[str] = None
    created_at: datetime


class PostDetail(PostOut):
    comments: List[CommentOut] = []


class PostUpdate(EntryEdit):
    password: Optional[str] = None


class CommentCreate(CamelModel):
    author: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class LikesOut(CamelModel):
    likes: int


class TagIn(CamelModel):
    tag: Optional[str] = None


class TagsOut(CamelModel):
    tags: Optional[str] = None
