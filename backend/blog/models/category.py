"""카테고리와 게시글 버전-카테고리 연결 테이블의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from blog.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(26), primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class PostVersionCategory(Base):
    __tablename__ = "post_version_categories"

    post_version_id = Column(String(26), ForeignKey("post_versions.id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(String(26), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_post_version_categories_category", "category_id"),
    )
