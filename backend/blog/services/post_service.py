"""게시글 버전 관리/발행 엔진입니다.

게시글마다 최신 버전의 상태(초안/발행)에 따라 전이가 결정됩니다.

- 초안 상태에서 수정하면 같은 버전을 제자리에서 고칩니다.
- 발행 상태에서 수정하면 ``version_number + 1`` 초안을 새로 만듭니다.
- 발행은 초안에 대해서만 한 번 성공합니다.
- 삭제는 초안에 대해서만 허용되며 ``current_version_id``를 직전 버전으로 되돌립니다.

모든 변경 연산은 하나의 트랜잭션 안에서 Post → PostVersion 순서로 행 잠금을 잡은 뒤
분기를 결정하므로 같은 게시글에 대한 동시 요청은 직렬화됩니다.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from blog.errors import (
    ConflictError,
    POST_NOT_FOUND,
    POST_VERSION_NOT_FOUND,
    InvalidInputError,
    NotFoundError,
)
from blog.models.post import Post, PostVersion
from blog.repositories.category_repository import CategoryRepository
from blog.repositories.post_repository import PostRepository
from blog.repositories.post_version_repository import PostVersionRepository
from blog.services import category_service
from blog.services.transaction import Transactor
from blog.utils.helpers import utcnow
from blog.utils.sanitizer import sanitize_content, sanitize_title

logger = logging.getLogger(__name__)


class PostService:
    def __init__(
        self,
        transactor: Transactor,
        post_repo: Optional[PostRepository] = None,
        version_repo: Optional[PostVersionRepository] = None,
        category_repo: Optional[CategoryRepository] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if transactor is None:
            raise ValueError("transactor is required")
        self._transactor = transactor
        self._posts = post_repo or PostRepository()
        self._versions = version_repo or PostVersionRepository()
        self._categories = category_repo or CategoryRepository()
        self._clock = clock

    def create(self, title: str, content: str) -> Dict[str, Any]:
        title = sanitize_title(title)
        content = sanitize_content(content)
        missing = [name for name, value in (("title", title), ("content", content)) if not value.strip()]
        if missing:
            raise InvalidInputError(f"{' and '.join(missing)} required")

        now = self._clock()
        with self._transactor.begin() as db:
            post = self._posts.create(db, Post(created_at=now, updated_at=now))
            version = self._versions.create(
                db,
                PostVersion(
                    post_id=post.id,
                    version_number=1,
                    title=title,
                    content=content,
                    published_at=None,
                    created_at=now,
                ),
            )
            post.current_version_id = version.id
            self._posts.update(db, post)
            logger.info("[post] created post %s with draft %s", post.id, version.id)
            return _post_response(post, version)

    def update(self, post_id: str, title: Optional[str] = None, content: Optional[str] = None) -> Dict[str, Any]:
        if title is not None:
            title = sanitize_title(title)
            if not title:
                raise InvalidInputError("title required")
        if content is not None:
            content = sanitize_content(content)
            if not content.strip():
                raise InvalidInputError("content required")

        with self._transactor.begin() as db:
            post = self._lock_post(db, post_id)
            latest = self._lock_latest_version(db, post_id)
            next_title = title if title is not None else latest.title
            next_content = content if content is not None else latest.content

            if latest.is_draft:
                latest.title = next_title
                latest.content = next_content
                self._versions.update(db, latest)
                logger.info("[post] amended draft %s (v%d) of post %s", latest.id, latest.version_number, post_id)
                return _post_response(post, latest)

            now = self._clock()
            draft = self._versions.create(
                db,
                PostVersion(
                    post_id=post.id,
                    version_number=latest.version_number + 1,
                    title=next_title,
                    content=next_content,
                    published_at=None,
                    created_at=now,
                ),
            )
            post.current_version_id = draft.id
            post.updated_at = now
            self._posts.update(db, post)
            logger.info("[post] opened draft %s (v%d) on top of published post %s", draft.id, draft.version_number, post_id)
            return _post_response(post, draft)

    def publish(self, post_id: str) -> Dict[str, Any]:
        with self._transactor.begin() as db:
            post = self._lock_post(db, post_id)
            latest = self._lock_latest_version(db, post_id)
            if not latest.is_draft:
                raise ConflictError("post version is already published")

            now = self._clock()
            latest.published_at = now
            self._versions.update(db, latest)
            post.current_version_id = latest.id
            post.updated_at = now
            self._posts.update(db, post)
            logger.info("[post] published %s (v%d) of post %s", latest.id, latest.version_number, post_id)
            return {
                "post_id": post.id,
                "published_at": latest.published_at,
                "title": latest.title,
                "content": latest.content,
            }

    def delete_draft(self, post_id: str) -> None:
        with self._transactor.begin() as db:
            post = self._lock_post(db, post_id)
            latest = self._lock_latest_version(db, post_id)
            if not latest.is_draft:
                raise ConflictError("only draft versions can be deleted")

            if post.current_version_id == latest.id:
                previous = self._versions.get_previous(db, post_id, latest.version_number)
                post.current_version_id = previous.id if previous is not None else None
                post.updated_at = self._clock()
                self._posts.update(db, post)
            self._versions.delete(db, latest.id)
            logger.info(
                "[post] deleted draft %s (v%d) of post %s, current version is now %s",
                latest.id,
                latest.version_number,
                post_id,
                post.current_version_id,
            )

    def get_by_id(self, post_id: str) -> Dict[str, Any]:
        with self._transactor.session() as db:
            row = self._posts.get_with_current_version(db, post_id)
            if row is None:
                raise NotFoundError(POST_NOT_FOUND)
            post, version = row
            categories = self._categories.list_by_post_version(db, version.id)
            return {
                "post_id": post.id,
                "current_version_id": post.current_version_id,
                "title": version.title,
                "content": version.content,
                "version_number": version.version_number,
                "published_at": version.published_at,
                "categories": [category_service.to_response(category) for category in categories],
                "created_at": post.created_at,
                "updated_at": post.updated_at,
            }

    def _lock_post(self, db: Session, post_id: str) -> Post:
        post = self._posts.get_by_id_for_update(db, post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        return post

    def _lock_latest_version(self, db: Session, post_id: str) -> PostVersion:
        version = self._versions.get_latest_by_post_id_for_update(db, post_id)
        if version is None:
            raise NotFoundError(POST_VERSION_NOT_FOUND)
        return version


def _post_response(post: Post, version: PostVersion) -> Dict[str, Any]:
    return {
        "post_id": post.id,
        "post_version_id": version.id,
        "title": version.title,
        "content": version.content,
    }
