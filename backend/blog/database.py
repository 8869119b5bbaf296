"""SQLAlchemy 엔진/세션 팩토리와 선언형 Base를 제공합니다."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from blog.config import settings

connect_args = {"check_same_thread": False} if settings.is_sqlite() else {}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=settings.DB_POOL_PRE_PING,
    echo=settings.DB_ECHO,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_session_factory() -> sessionmaker:
    # 라우터는 세션이 아니라 팩토리를 주입받아 트랜잭션 경계를 서비스에서 연다.
    return SessionLocal


def acquire_write_lock(db: Session) -> None:
    # SQLite는 FOR UPDATE를 무시하므로 잠금 조회 전에 DB 쓰기 잠금을 잡아 변경 트랜잭션을 직렬화한다.
    connection = db.connection()
    if connection.dialect.name != "sqlite":
        return
    if not connection.connection.dbapi_connection.in_transaction:
        connection.exec_driver_sql("BEGIN IMMEDIATE")
