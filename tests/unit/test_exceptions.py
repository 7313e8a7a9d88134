import json
import pytest

from shopledger.errors import ErrorType, ERROR_STATUS_MAP
from shopledger.exceptions import AppException, app_exception_handler


class TestAppExceptionHandler:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error_type,status_code", [
        (ErrorType.NOT_FOUND, 404),
        (ErrorType.VALIDATION_ERROR, 422),
        (ErrorType.INSUFFICIENT_STOCK, 409),
        (ErrorType.STORE_ERROR, 500),
        (ErrorType.TIMEOUT, 504),
        (ErrorType.INTERNAL_ERROR, 500),
    ])
    async def test_status_codes(self, error_type, status_code):
        response = await app_exception_handler(None, AppException(error_type, "message"))

        assert response.status_code == status_code
        assert json.loads(response.body) == {"error": "message"}

    def test_every_error_type_is_mapped(self):
        assert set(ERROR_STATUS_MAP) == set(ErrorType)
