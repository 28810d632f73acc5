from util.error_codes import INVALID_CONTEXT_OPTIONS, UNSUPPORTED_CONTEXT, UNSUPPORTED_DIALECT
from util.errors import NotFoundError, ValidationError


class UnsupportedContextError(NotFoundError):
    def __init__(self, message: str, error_code: int = UNSUPPORTED_CONTEXT):
        super().__init__(message, error_code, emoji = "🧭")


class UnsupportedDialectError(ValidationError):
    def __init__(self, message: str, error_code: int = UNSUPPORTED_DIALECT):
        super().__init__(message, error_code, emoji = "🗣️")


class InvalidContextOptionsError(ValidationError):
    def __init__(self, message: str, error_code: int = INVALID_CONTEXT_OPTIONS):
        super().__init__(message, error_code)
