"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from blog.models.post import Post, PostVersion
from blog.models.category import Category, PostVersionCategory

__all__ = [
    "Post", "PostVersion",
    "Category", "PostVersionCategory",
]
