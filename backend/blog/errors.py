"""도메인 오류 분류 체계입니다. 전송 계층은 status_code로 응답 코드를 매핑합니다."""


class BlogError(Exception):
    status_code = 500
    default_message = "An internal server error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__.removesuffix("Error").lower()


class NotFoundError(BlogError):
    status_code = 404
    default_message = "The requested resource was not found"


class ConflictError(BlogError):
    status_code = 409
    default_message = "The request conflicts with the current state"


class InvalidInputError(BlogError):
    status_code = 400
    default_message = "Invalid input"


class InternalError(BlogError):
    status_code = 500


POST_NOT_FOUND = "The requested post was not found"
POST_VERSION_NOT_FOUND = "The requested post version was not found"
CATEGORY_NOT_FOUND = "category not found"
CATEGORY_NAME_DUPLICATE = "category name already exists"
