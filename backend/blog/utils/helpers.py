from datetime import datetime, timezone

from ulid import ULID

_ULID_LENGTH = 26
_CROCKFORD_ALPHABET = frozenset("0123456789ABCDEFGHJKMNPQRSTVWXYZ")
# 첫 글자가 7을 넘으면 128비트를 초과한다.
_ULID_MAX_FIRST_CHAR = "7"


def new_id() -> str:
    return str(ULID())


def is_valid_id(value) -> bool:
    if not isinstance(value, str) or len(value) != _ULID_LENGTH:
        return False
    if value[0] > _ULID_MAX_FIRST_CHAR or not set(value) <= _CROCKFORD_ALPHABET:
        return False
    try:
        ULID.from_str(value)
    except ValueError:
        return False
    return True


def utcnow() -> datetime:
    # DB 컬럼은 timezone 정보 없이 UTC 기준으로 저장한다.
    return datetime.now(timezone.utc).replace(tzinfo=None)
