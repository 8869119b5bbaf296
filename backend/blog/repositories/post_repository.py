"""Post 저장소. 게시글 셸 생성/갱신과 잠금 조회를 담당합니다."""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Query, Session

from blog.database import acquire_write_lock
from blog.models.post import Post, PostVersion
from blog.utils.helpers import new_id

logger = logging.getLogger(__name__)


class PostRepository:
    def create(self, db: Session, post: Post) -> Post:
        post.id = new_id()
        db.add(post)
        db.flush()
        return post

    def update(self, db: Session, post: Post) -> Post:
        db.add(post)
        db.flush()
        return post

    def for_update_query(self, db: Session, post_id: str) -> Query:
        return (
            db.query(Post)
            .filter(Post.id == post_id)
            .with_for_update()
            .populate_existing()
        )

    def get_by_id_for_update(self, db: Session, post_id: str) -> Optional[Post]:
        acquire_write_lock(db)
        post = self.for_update_query(db, post_id).first()
        if post is None:
            logger.info("[post] post not found for update: %s", post_id)
        return post

    def get_with_current_version(self, db: Session, post_id: str) -> Optional[Tuple[Post, PostVersion]]:
        row = (
            db.query(Post, PostVersion)
            .join(PostVersion, PostVersion.id == Post.current_version_id)
            .filter(Post.id == post_id)
            .first()
        )
        if row is None:
            return None
        post, version = row
        return post, version
