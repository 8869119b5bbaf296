"""카테고리 생성/수정과 게시글 버전에 카테고리를 연결하는 워크플로입니다."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from blog.errors import (
    ConflictError,
    CATEGORY_NAME_DUPLICATE,
    CATEGORY_NOT_FOUND,
    POST_VERSION_NOT_FOUND,
    InvalidInputError,
    NotFoundError,
)
from blog.models.category import Category
from blog.repositories.category_repository import CategoryRepository
from blog.repositories.post_version_repository import PostVersionRepository
from blog.services.transaction import Transactor
from blog.utils.helpers import utcnow
from blog.utils.validators import validate_attach_request, validate_category_name

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(
        self,
        transactor: Transactor,
        category_repo: Optional[CategoryRepository] = None,
        version_repo: Optional[PostVersionRepository] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if transactor is None:
            raise ValueError("transactor is required")
        self._transactor = transactor
        self._categories = category_repo or CategoryRepository()
        self._versions = version_repo or PostVersionRepository()
        self._clock = clock

    def create(self, name: str) -> Dict[str, Any]:
        name = validate_category_name(name)
        with self._transactor.begin() as db:
            if self._categories.get_by_name(db, name) is not None:
                raise ConflictError(CATEGORY_NAME_DUPLICATE)
            now = self._clock()
            category = self._categories.create(db, Category(name=name, created_at=now, updated_at=now))
            logger.info("[category] created category %s (%s)", category.id, category.name)
            return to_response(category)

    def update(self, category_id: str, name: str) -> Dict[str, Any]:
        name = validate_category_name(name)
        with self._transactor.begin() as db:
            category = self._categories.get_by_id_for_update(db, category_id)
            if category is None:
                raise NotFoundError(CATEGORY_NOT_FOUND)
            if category.name == name:
                raise InvalidInputError("name is the same as before")
            other = self._categories.get_by_name(db, name)
            if other is not None and other.id != category.id:
                raise ConflictError(CATEGORY_NAME_DUPLICATE)
            category.name = name
            category.updated_at = self._clock()
            self._categories.update(db, category)
            logger.info("[category] renamed category %s to %s", category.id, category.name)
            return to_response(category)

    def attach_to_post_version(self, post_version_id: str, category_ids: List[str]) -> None:
        category_ids = validate_attach_request(post_version_id, category_ids)
        with self._transactor.begin() as db:
            # 연결 도중 초안이 삭제되지 않도록 버전 행을 잠근다.
            version = self._versions.get_by_id_for_update(db, post_version_id)
            if version is None:
                raise NotFoundError(POST_VERSION_NOT_FOUND)

            found = {category.id for category in self._categories.get_by_ids(db, category_ids)}
            missing = [category_id for category_id in category_ids if category_id not in found]
            if missing:
                raise NotFoundError(f"{CATEGORY_NOT_FOUND}: {', '.join(missing)}")

            now = self._clock()
            rows = [
                {"post_version_id": post_version_id, "category_id": category_id, "created_at": now}
                for category_id in category_ids
            ]
            self._categories.attach_to_post_version(db, rows)


def to_response(category: Category) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }
