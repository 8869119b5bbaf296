"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import Dict, List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./blog.db"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Database
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    # Sanitizer: 제목은 태그를 모두 제거하고, 본문은 아래 허용 목록만 남긴다.
    SANITIZE_ALLOWED_TAGS: List[str] = [
        "p", "br", "hr", "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "blockquote", "pre", "code",
        "strong", "em", "b", "i", "u", "s", "sub", "sup",
        "a", "img", "figure", "figcaption",
        "table", "thead", "tbody", "tr", "th", "td",
        "div", "span",
    ]
    SANITIZE_ALLOWED_ATTRIBUTES: Dict[str, List[str]] = {
        "a": ["href", "title", "rel"],
        "img": ["src", "alt", "title", "width", "height"],
    }
    SANITIZE_ALLOWED_PROTOCOLS: List[str] = ["http", "https", "mailto"]

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
