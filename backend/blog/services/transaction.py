"""트랜잭션 경계를 스코프로 관리합니다.

``Transactor.begin()`` 블록은 정상 종료 시에만 커밋하고, 그 밖의 모든 종료 경로
(도메인 오류, 저장소 오류, 예기치 못한 예외, 취소)에서는 정확히 한 번 롤백한 뒤
원래 예외를 다시 던집니다. 롤백 자체의 실패는 로그로만 남기고 원래 오류를 덮어쓰지
않습니다.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from blog.errors import BlogError, InternalError

logger = logging.getLogger(__name__)


class Transactor:
    def __init__(self, session_factory: sessionmaker):
        if session_factory is None:
            raise ValueError("session_factory is required")
        self._session_factory = session_factory

    @contextmanager
    def begin(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            _rollback(db, "store_failure")
            logger.error("[transaction] store operation failed: %s", exc)
            raise InternalError() from exc
        except BlogError:
            _rollback(db, "error_propagation")
            raise
        except BaseException:
            _rollback(db, "unexpected_failure")
            raise
        finally:
            db.close()

    @contextmanager
    def session(self) -> Iterator[Session]:
        # 잠금 없는 조회 전용 세션
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            logger.error("[transaction] read failed: %s", exc)
            raise InternalError() from exc
        finally:
            db.close()


def _rollback(db: Session, source: str) -> None:
    try:
        db.rollback()
    except SQLAlchemyError as exc:
        logger.error("[transaction] failed to rollback transaction (%s): %s", source, exc)
