"""PostVersion 저장소. 최신 버전 잠금 조회, 초안 갱신/삭제를 담당합니다."""

import logging
from typing import Optional

from sqlalchemy.orm import Query, Session

from blog.database import acquire_write_lock
from blog.errors import InternalError
from blog.models.category import PostVersionCategory
from blog.models.post import PostVersion
from blog.utils.helpers import new_id

logger = logging.getLogger(__name__)


class PostVersionRepository:
    def create(self, db: Session, version: PostVersion) -> PostVersion:
        version.id = new_id()
        db.add(version)
        db.flush()
        return version

    def update(self, db: Session, version: PostVersion) -> PostVersion:
        db.add(version)
        db.flush()
        return version

    def latest_for_update_query(self, db: Session, post_id: str) -> Query:
        return (
            db.query(PostVersion)
            .filter(PostVersion.post_id == post_id)
            .order_by(PostVersion.version_number.desc())
            .limit(1)
            .with_for_update()
            .populate_existing()
        )

    def get_latest_by_post_id_for_update(self, db: Session, post_id: str) -> Optional[PostVersion]:
        acquire_write_lock(db)
        version = self.latest_for_update_query(db, post_id).first()
        if version is None:
            logger.info("[post] no post versions found for post id: %s", post_id)
        return version

    def get_previous(self, db: Session, post_id: str, version_number: int) -> Optional[PostVersion]:
        return (
            db.query(PostVersion)
            .filter(
                PostVersion.post_id == post_id,
                PostVersion.version_number < version_number,
            )
            .order_by(PostVersion.version_number.desc())
            .first()
        )

    def get_by_id(self, db: Session, version_id: str) -> Optional[PostVersion]:
        return db.query(PostVersion).filter(PostVersion.id == version_id).first()

    def get_by_id_for_update(self, db: Session, version_id: str) -> Optional[PostVersion]:
        acquire_write_lock(db)
        return (
            db.query(PostVersion)
            .filter(PostVersion.id == version_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def delete(self, db: Session, version_id: str) -> None:
        # 연결 테이블을 먼저 비워 FK 강제 여부와 무관하게 고아 행을 남기지 않는다.
        db.query(PostVersionCategory).filter(
            PostVersionCategory.post_version_id == version_id
        ).delete(synchronize_session=False)
        deleted = db.query(PostVersion).filter(PostVersion.id == version_id).delete()
        if deleted != 1:
            logger.error("[post] post version not found or already deleted: %s", version_id)
            raise InternalError("post version not found or already deleted")
