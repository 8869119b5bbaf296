"""게시글 제목/본문을 저장 전에 정제하는 유틸리티입니다."""

import bleach
from bs4 import BeautifulSoup

from blog.config import settings

# 태그만 제거하면 내부 텍스트(스크립트 코드)가 본문에 남으므로 요소째 버린다.
DROP_WITH_CONTENT = ("script", "style", "iframe", "object", "embed", "noscript")


def _drop_dangerous_elements(raw: str) -> str:
    soup = BeautifulSoup(raw, "html.parser")
    for node in soup.find_all(DROP_WITH_CONTENT):
        node.decompose()
    return str(soup)


def sanitize_title(raw: str | None) -> str:
    if not raw:
        return ""
    cleaned = bleach.clean(_drop_dangerous_elements(raw), tags=set(), attributes={}, strip=True)
    return cleaned.strip()


def sanitize_content(raw: str | None) -> str:
    if not raw:
        return ""
    return bleach.clean(
        _drop_dangerous_elements(raw),
        tags=set(settings.SANITIZE_ALLOWED_TAGS),
        attributes=settings.SANITIZE_ALLOWED_ATTRIBUTES,
        protocols=set(settings.SANITIZE_ALLOWED_PROTOCOLS),
        strip=True,
    )
