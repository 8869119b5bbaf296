"""전송 계층 경계에서 수행하는 입력 검증입니다. 트랜잭션을 열기 전에 호출합니다."""

from typing import List, Optional

from blog.errors import InvalidInputError
from blog.utils.helpers import is_valid_id


def _require(fields) -> None:
    missing = [name for name, value in fields if not (value or "").strip()]
    if missing:
        raise InvalidInputError(f"{' and '.join(missing)} required")


def validate_id(value: Optional[str], label: str = "ID") -> str:
    if not value or not is_valid_id(value):
        raise InvalidInputError(f"Invalid {label}")
    return value


def validate_create_post(title: Optional[str], content: Optional[str]) -> None:
    _require((("title", title), ("content", content)))


def validate_update_post(title: Optional[str], content: Optional[str]) -> None:
    if not (title or "").strip() and not (content or "").strip():
        raise InvalidInputError("title or content is required")


def validate_category_name(name: Optional[str]) -> str:
    _require((("name", name),))
    return name.strip()


def validate_attach_request(post_version_id: Optional[str], category_ids: Optional[List[str]]) -> List[str]:
    missing = []
    if not post_version_id:
        missing.append("post version id")
    if not category_ids:
        missing.append("category ids")
    if missing:
        raise InvalidInputError(f"{' and '.join(missing)} required")
    if not is_valid_id(post_version_id):
        raise InvalidInputError("invalid post version id")

    invalid = [category_id for category_id in category_ids if not is_valid_id(category_id)]
    if invalid:
        raise InvalidInputError(f"invalid category ids: {', '.join(invalid)}")
    duplicated = sorted({category_id for category_id in category_ids if category_ids.count(category_id) > 1})
    if duplicated:
        raise InvalidInputError(f"duplicate category ids: {', '.join(duplicated)}")
    return list(category_ids)
