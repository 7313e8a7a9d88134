from enum import Enum


class ErrorType(Enum):
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    INSUFFICIENT_STOCK = "insufficient_stock"
    STORE_ERROR = "store_error"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.VALIDATION_ERROR: 422,
    ErrorType.INSUFFICIENT_STOCK: 409,
    ErrorType.STORE_ERROR: 500,
    ErrorType.TIMEOUT: 504,
    ErrorType.INTERNAL_ERROR: 500,
}
