"""Category 저장소. 카테고리 CRUD 일부와 버전-카테고리 연결을 담당합니다."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog.database import acquire_write_lock
from blog.errors import ConflictError, CATEGORY_NAME_DUPLICATE
from blog.models.category import Category, PostVersionCategory
from blog.utils.helpers import new_id

logger = logging.getLogger(__name__)


def _insert_ignoring_duplicates(db: Session, table):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite.insert(table).on_conflict_do_nothing()
    # MySQL/MariaDB
    return insert(table).prefix_with("IGNORE")


class CategoryRepository:
    def create(self, db: Session, category: Category) -> Category:
        category.id = new_id()
        db.add(category)
        self._flush_unique_name(db, category)
        return category

    def update(self, db: Session, category: Category) -> Category:
        db.add(category)
        self._flush_unique_name(db, category)
        return category

    def _flush_unique_name(self, db: Session, category: Category) -> None:
        try:
            db.flush()
        except IntegrityError as exc:
            logger.info("[category] duplicate category name %r: %s", category.name, exc.orig)
            raise ConflictError(CATEGORY_NAME_DUPLICATE) from exc

    def get_by_id_for_update(self, db: Session, category_id: str) -> Optional[Category]:
        acquire_write_lock(db)
        return (
            db.query(Category)
            .filter(Category.id == category_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_by_name(self, db: Session, name: str) -> Optional[Category]:
        return db.query(Category).filter(Category.name == name).first()

    def get_by_ids(self, db: Session, ids: List[str]) -> List[Category]:
        if not ids:
            return []
        return db.query(Category).filter(Category.id.in_(ids)).all()

    def attach_to_post_version(self, db: Session, rows: List[Dict]) -> int:
        if not rows:
            return 0
        result = db.execute(_insert_ignoring_duplicates(db, PostVersionCategory.__table__), rows)
        inserted = max(result.rowcount or 0, 0)
        logger.info(
            "[category] attached %d of %d categories to post version %s",
            inserted,
            len(rows),
            rows[0]["post_version_id"],
        )
        return inserted

    def list_by_post_version(self, db: Session, post_version_id: str) -> List[Category]:
        return (
            db.query(Category)
            .join(PostVersionCategory, PostVersionCategory.category_id == Category.id)
            .filter(PostVersionCategory.post_version_id == post_version_id)
            .order_by(Category.name.asc())
            .all()
        )
