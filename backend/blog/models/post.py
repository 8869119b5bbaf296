"""게시글(Post)과 게시글 버전(PostVersion)의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index, UniqueConstraint, text
from sqlalchemy.orm import relationship

from blog.database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(26), primary_key=True)
    # 첫 버전 생성 전 또는 유일한 초안 삭제 후에만 NULL
    current_version_id = Column(String(26), nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    versions = relationship("PostVersion", back_populates="post", order_by="PostVersion.version_number")


class PostVersion(Base):
    __tablename__ = "post_versions"

    id = Column(String(26), primary_key=True)
    post_id = Column(String(26), ForeignKey("posts.id"), nullable=False)
    version_number = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    published_at = Column(DateTime, nullable=True)  # NULL이면 초안
    created_at = Column(DateTime, nullable=False)

    post = relationship("Post", back_populates="versions")

    __table_args__ = (
        UniqueConstraint("post_id", "version_number", name="uq_post_versions_post_number"),
        Index(
            "uq_post_versions_single_draft",
            "post_id",
            unique=True,
            postgresql_where=text("published_at IS NULL"),
            sqlite_where=text("published_at IS NULL"),
        ),
    )

    @property
    def is_draft(self) -> bool:
        return self.published_at is None
