"""게시글 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from blog.schemas.category import CategoryOut


class PostCreate(BaseModel):
    title: str = ""
    content: str = ""


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostOut(BaseModel):
    post_id: str
    post_version_id: str
    title: str
    content: str


class PublishOut(BaseModel):
    post_id: str
    published_at: datetime
    title: str
    content: str


class PostDetailOut(BaseModel):
    post_id: str
    current_version_id: Optional[str]
    title: str
    content: str
    version_number: int
    published_at: Optional[datetime] = None
    categories: List[CategoryOut] = []
    created_at: datetime
    updated_at: datetime


class MessageOut(BaseModel):
    message: str
