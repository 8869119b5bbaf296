"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 도메인 오류 핸들러를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog.config import settings
from blog.database import Base, engine
from blog.errors import BlogError
import blog.models  # noqa: F401 - 모델 import로 metadata 등록
from blog.routers import posts, categories

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Blog 게시글 버전 관리 시스템",
    description="게시글을 버전 단위로 관리하고 초안/발행 수명주기를 제공하는 백엔드",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts.router)
app.include_router(categories.router)


@app.exception_handler(BlogError)
async def handle_blog_error(request: Request, exc: BlogError):
    if exc.status_code >= 500:
        logger.error("[api] %s %s failed (%s): %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
def ensure_schema():
    # 스키마 마이그레이션은 외부 도구 담당이며, 개발용 SQLite에서만 테이블을 자동 생성한다.
    if settings.is_sqlite():
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Blog 게시글 버전 관리 시스템"}
